import functools

import pytest

from passpass import passpass_cli
from passpass.utils.vault_utils import VaultStore

from conftest import FAST_ITERATIONS


@pytest.fixture
def clipboard(monkeypatch):
    copies = []

    def copy(text):
        copies.append(text)
        return True

    monkeypatch.setattr(passpass_cli, "copy_to_clipboard", copy)
    monkeypatch.setattr(passpass_cli, "reset_clipboard", lambda: copies.append(""))
    return copies


@pytest.fixture
def answers(monkeypatch):
    """Feed scripted lines to input(). Running out behaves like Ctrl-D."""
    lines = []

    def fake_input(prompt=""):
        if not lines:
            raise EOFError
        return lines.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)
    return lines


def test_commands_match_menu_letters():
    assert [c.value for c in passpass_cli.Command] == ["l", "a", "d", "c", "q"]


def test_add_entry(unlocked_store, clipboard, answers):
    answers.extend(["a", "example.com", "alice", "n", "y", "q"])
    passpass_cli.pass_repl(unlocked_store)

    assert unlocked_store.list_records() == [(0, "example.com", "alice")]
    password = unlocked_store.reveal_password(0)
    assert len(password) == 72
    # two generated passwords, the accepted one is the second
    assert clipboard[1] == password
    assert clipboard[-1] == ""


def test_add_existing_entry_is_refused(unlocked_store, clipboard, answers, capsys):
    unlocked_store.add_record("example.com", "alice", "p@ss")
    answers.extend(["a", "example.com", "alice", "q"])
    passpass_cli.pass_repl(unlocked_store)

    assert "already exist" in capsys.readouterr().out
    assert len(unlocked_store) == 1
    assert clipboard == []


def test_show_entry_copies_password(unlocked_store, clipboard, answers, capsys):
    unlocked_store.add_record("example.com", "alice", "p@ss")
    answers.extend(["l", "0", "", "q"])
    passpass_cli.pass_repl(unlocked_store)

    out = capsys.readouterr().out
    assert "  0: example.com (alice)" in out
    assert "username: alice" in out
    assert "p@ss" not in out
    assert clipboard == ["p@ss", ""]


def test_show_entry_cancel(unlocked_store, clipboard, answers):
    unlocked_store.add_record("example.com", "alice", "p@ss")
    answers.extend(["l", "c", "q"])
    passpass_cli.pass_repl(unlocked_store)
    assert clipboard == []


def test_list_empty_vault(unlocked_store, answers, capsys):
    answers.extend(["l", "q"])
    passpass_cli.pass_repl(unlocked_store)
    assert "No entries found in the database!" in capsys.readouterr().out


def test_delete_entry(unlocked_store, answers):
    unlocked_store.add_record("example.com", "alice", "1")
    unlocked_store.add_record("example.com", "bob", "2")
    answers.extend(["d", "1", "q"])
    passpass_cli.pass_repl(unlocked_store)
    assert unlocked_store.list_records() == [(0, "example.com", "alice")]


def test_delete_out_of_range(unlocked_store, answers, capsys):
    unlocked_store.add_record("example.com", "alice", "1")
    answers.extend(["d", "4", "q"])
    passpass_cli.pass_repl(unlocked_store)
    assert "Invalid" in capsys.readouterr().out
    assert len(unlocked_store) == 1


def test_change_password_errors_return_to_menu(unlocked_store, answers, monkeypatch, capsys):
    secrets = iter([b"wrong", b"new", b"new"])
    monkeypatch.setattr(passpass_cli, "prompt_passphrase", lambda label: next(secrets))
    monkeypatch.setattr(passpass_cli, "confirm_passphrase", lambda label: next(secrets))
    answers.extend(["c", "q"])
    passpass_cli.pass_repl(unlocked_store)
    assert "Current master password is wrong!" in capsys.readouterr().out


def test_change_password(unlocked_store, make_store, answers, monkeypatch):
    secrets = iter([b"hunter2", b"new", b"new"])
    monkeypatch.setattr(passpass_cli, "prompt_passphrase", lambda label: next(secrets))
    monkeypatch.setattr(passpass_cli, "confirm_passphrase", lambda label: next(secrets))
    answers.extend(["c", "q"])
    passpass_cli.pass_repl(unlocked_store)
    make_store().unlock(b"new")


def test_invalid_choice_and_end_of_input(unlocked_store, answers, capsys):
    answers.extend(["x"])
    passpass_cli.pass_repl(unlocked_store)
    assert "Invalid Choice" in capsys.readouterr().out


@pytest.fixture
def fast_main(monkeypatch):
    monkeypatch.setattr(passpass_cli, "setup_logging", lambda: None)
    monkeypatch.setattr(passpass_cli.atexit, "register", lambda func: None)
    monkeypatch.setattr(passpass_cli, "VaultStore",
                        functools.partial(VaultStore, iterations=FAST_ITERATIONS))


def test_main_creates_vault(fast_main, vault_path, answers, monkeypatch, capsys):
    monkeypatch.setattr(passpass_cli, "prompt_passphrase", lambda label: b"hunter2")
    monkeypatch.setattr(passpass_cli, "confirm_passphrase", lambda label: b"hunter2")
    answers.extend(["q"])
    passpass_cli.main(vault_path)

    out = capsys.readouterr().out
    assert "A database was not found" in out
    assert "Goodbye!" in out
    assert vault_path.exists()


def test_main_exits_on_confirmation_mismatch(fast_main, vault_path, monkeypatch):
    monkeypatch.setattr(passpass_cli, "prompt_passphrase", lambda label: b"hunter2")
    monkeypatch.setattr(passpass_cli, "confirm_passphrase", lambda label: b"other")
    with pytest.raises(SystemExit) as exc:
        passpass_cli.main(vault_path)
    assert exc.value.code == 1
    assert not vault_path.exists()


def test_main_exits_on_wrong_password(fast_main, unlocked_store, vault_path, monkeypatch, capsys):
    monkeypatch.setattr(passpass_cli, "prompt_passphrase", lambda label: b"wrong")
    with pytest.raises(SystemExit) as exc:
        passpass_cli.main(vault_path)
    assert exc.value.code == 1
    assert "Wrong master password or vault is corrupted!" in capsys.readouterr().err


@pytest.mark.parametrize("script", [
    ["a", "example.com"],
    ["a", "example.com", "alice"],
    ["l"],
])
def test_end_of_input_inside_command_quits(unlocked_store, clipboard, answers, script):
    unlocked_store.add_record("example.com", "bob", "p@ss")
    answers.extend(script)
    passpass_cli.pass_repl(unlocked_store)
    assert unlocked_store.list_records() == [(0, "example.com", "bob")]
