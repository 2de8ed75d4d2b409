import contextlib
import enum
import hmac
import logging
import os
from pathlib import Path
from typing import Callable, List, Optional

from passpass.config.config_vault import VAULT_FILE, KDF_ITERATIONS, UTF8
from passpass.config.logging_config import timestamp
from .crypto_utils import derive_key, encrypt, decrypt, new_iv
from .vault_codec import serialize, deserialize, encode_vault_file, decode_vault_file
from .vault_errors import (
    DecryptionError,
    DuplicateError,
    MalformedVaultError,
    PersistError,
    RecordNotFoundError,
    UnlockConfirmationMismatch,
    VaultLockedError,
    WrongCurrentPassword,
    WrongPasswordOrCorrupt,
    ChangeConfirmationMismatch,
)
from .Record import Record, ListedRecord
from .user_input import confirm_passphrase

logger = logging.getLogger(__name__)


class VaultState(enum.Enum):
    LOCKED = "locked"
    UNLOCKING = "unlocking"
    UNLOCKED = "unlocked"
    FAILED = "failed"


class VaultStore:
    """
    Owns the master key and the decrypted records for one session.

    The vault file is rewritten in full after every mutation. There is no
    incremental append and no file locking; the last writer wins.

    Args:
        path: Location of the vault file.
        confirm: Called with a prompt label on first run to read the
            master password a second time. Must return bytes.
        iterations: SHA-256 rounds used for key derivation.
    """

    def __init__(self, path: Path | str = VAULT_FILE,
                 confirm: Callable[[str], bytes] = confirm_passphrase,
                 iterations: int = KDF_ITERATIONS):
        self.path = Path(path)
        self.confirm = confirm
        self.iterations = iterations
        self.state = VaultState.LOCKED
        self._key: Optional[bytes] = None
        self._records: List[Record] = []

    def __repr__(self):
        return (
            f"VaultStore(path={str(self.path)!r}, state={self.state.value}, "
            f"records={len(self._records)})"
        )

    # ==============================================================
    # Lifecycle
    # ==============================================================
    def unlock(self, master_pw: bytes, path: Path | str | None = None) -> None:
        """
        Unlock the vault with the master password.

        If the vault file exists it is decrypted and parsed. If it does not,
        the master password is confirmed through `self.confirm` and a new
        empty vault is written immediately.

        Args:
            master_pw: Master password as raw bytes.
            path: Optional vault location replacing the one given at
                construction.

        Raises:
            WrongPasswordOrCorrupt: If the existing file cannot be
                decrypted or parsed with the derived key.
            UnlockConfirmationMismatch: If the confirmation on first run
                differs. No file is created.
            PersistError: If the new vault cannot be written.
            VaultLockedError: If the store was already unlocked or failed.

        Security Notes:
            - Wrong password and corrupted file are reported the same way.
            - The key derivation is slow on purpose; nothing is retried here.
        """
        if self.state is not VaultState.LOCKED:
            raise VaultLockedError(f"Cannot unlock a vault in state '{self.state.value}'")

        if path is not None:
            self.path = Path(path)

        self.state = VaultState.UNLOCKING
        try:
            key = derive_key(master_pw, self.iterations)

            # ==============================================================
            # 1. Load existing vault
            # ==============================================================
            if self.path.exists():
                self._key = key
                self._records = self._read(key)

            # ==============================================================
            # 2. First run, create new vault
            # ==============================================================
            else:
                confirm_pw = self.confirm("repeat new master password")
                if not hmac.compare_digest(bytes(master_pw), bytes(confirm_pw)):
                    raise UnlockConfirmationMismatch()
                del confirm_pw

                self._key = key
                self._records = []
                self.persist()
                logger.info(f"[{timestamp()}] Created new vault at {self.path}")

        except Exception:
            self.state = VaultState.FAILED
            self._key = None
            self._records = []
            raise

        self.state = VaultState.UNLOCKED

    def lock(self) -> None:
        """Forget key and records. A failed store stays failed."""
        self._key = None
        self._records = []
        if self.state is not VaultState.FAILED:
            self.state = VaultState.LOCKED

    @property
    def unlocked(self) -> bool:
        return self.state is VaultState.UNLOCKED

    def _require_unlocked(self) -> None:
        if self.state is not VaultState.UNLOCKED:
            raise VaultLockedError("Vault is locked")

    # ==============================================================
    # Storage
    # ==============================================================
    def _read(self, key: bytes) -> List[Record]:
        """
        Read, decrypt and parse the vault file.

        All failures collapse into WrongPasswordOrCorrupt. The cause is
        logged but never shown to the user.
        """
        try:
            text = self.path.read_text(encoding="ascii")
            ciphertext, iv = decode_vault_file(text)
            return deserialize(decrypt(ciphertext, key, iv))
        except (OSError, UnicodeDecodeError, MalformedVaultError, DecryptionError) as e:
            logger.error(f"[{timestamp()}] Unlock failed for {self.path}: {type(e).__name__}\n")
            raise WrongPasswordOrCorrupt() from None

    def persist(self) -> None:
        """
        Encrypt all records and overwrite the vault file.

        A fresh IV is generated on every call. The data is written to a
        temporary file first, flushed to disk and then atomically moved over
        the vault file.

        Raises:
            PersistError: If writing fails. The in-memory records are kept,
                so memory and disk disagree until the next successful save.
        """
        if self._key is None:
            raise VaultLockedError("No master key available")

        iv = new_iv()
        ciphertext = encrypt(serialize(self._records), self._key, iv)
        contents = encode_vault_file(ciphertext, iv)

        # Write to temporary file first.
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp, "w", encoding=UTF8) as f:
                f.write(contents)
                f.flush()
                os.fsync(f.fileno())  # force to disk

            # Atomic replace the vault file.
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            logger.error(f"[{timestamp()}] Could not save vault to {self.path}: {e}\n")
            raise PersistError(f"Could not save vault: {e}") from e

    # ==============================================================
    # Records
    # ==============================================================
    def has_record(self, site: str, username: str) -> bool:
        self._require_unlocked()
        return any(r.identity == (site, username) for r in self._records)

    def add_record(self, site: str, username: str, password: str) -> Record:
        """
        Append a new record and save the vault.

        Raises:
            DuplicateError: If (site, username) already exists. Comparison
                is exact and case-sensitive. Nothing is changed or written.
            PersistError: If saving fails.
        """
        self._require_unlocked()
        if self.has_record(site, username):
            raise DuplicateError(site, username)

        record = Record(site, username, password)
        self._records.append(record)
        self.persist()
        return record

    def delete_record(self, site: str, username: str) -> int:
        """
        Remove every record matching (site, username) and save the vault.

        Returns:
            Number of records removed. Nothing is written when it is 0.
        """
        self._require_unlocked()
        kept = [r for r in self._records if r.identity != (site, username)]
        removed = len(self._records) - len(kept)
        if removed:
            self._records = kept
            self.persist()
        return removed

    def list_records(self) -> List[ListedRecord]:
        """Index, site and username of every record, in vault order."""
        self._require_unlocked()
        return [
            ListedRecord(i, r.site, r.username)
            for i, r in enumerate(self._records)
        ]

    def get_record(self, index: int) -> Record:
        self._require_unlocked()
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._records):
            raise RecordNotFoundError(f"No record at index {index}")
        return self._records[index]

    def reveal_password(self, index: int) -> str:
        """Password of the record at index, for display or clipboard use."""
        return self.get_record(index).password

    def __len__(self):
        return len(self._records)

    # ==============================================================
    # Master password
    # ==============================================================
    def change_master_password(self, current_pw: bytes, new_pw: bytes,
                               confirm_pw: bytes) -> None:
        """
        Change the master password and re-encrypt the vault.

        The current password is verified by deriving its key again and
        comparing it to the key in memory, so the raw master password never
        has to be kept for the session.

        Raises:
            WrongCurrentPassword: If current_pw does not match.
            ChangeConfirmationMismatch: If new_pw and confirm_pw differ.
            PersistError: If saving fails. The new key stays in memory.

        Security Notes:
            - Costs two full key derivations.
            - A fresh IV is used for the re-encrypted vault.
        """
        self._require_unlocked()

        if not hmac.compare_digest(derive_key(current_pw, self.iterations), self._key):
            logger.error(f"[{timestamp()}] Change of master password rejected: wrong current password\n")
            raise WrongCurrentPassword()

        if not hmac.compare_digest(bytes(new_pw), bytes(confirm_pw)):
            raise ChangeConfirmationMismatch()

        self._key = derive_key(new_pw, self.iterations)
        self.persist()
