import pytest

from passpass.utils.vault_utils import VaultStore

# Keeps key derivation fast. Vaults written with it only open with it.
FAST_ITERATIONS = 10


@pytest.fixture
def vault_path(tmp_path):
    return tmp_path / ".__passpass"


@pytest.fixture
def make_store(vault_path):
    """Factory for stores on the same vault file with a scripted confirmation."""
    def _make(confirm_pw: bytes = b"hunter2", path=None):
        calls = []

        def confirm(label):
            calls.append(label)
            return confirm_pw

        store = VaultStore(path or vault_path, confirm=confirm, iterations=FAST_ITERATIONS)
        store.confirm_calls = calls
        return store

    return _make


@pytest.fixture
def unlocked_store(make_store):
    store = make_store()
    store.unlock(b"hunter2")
    return store
