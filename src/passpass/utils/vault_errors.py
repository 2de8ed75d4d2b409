"""
Exceptions raised by the vault core.

Every error the core produces derives from VaultError so the menu loop can
report it and carry on. Unlock failures are the exception: without a key
there is nothing left to do.
"""


class VaultError(Exception):
    """Base class for all vault errors."""


class ConfirmationMismatchError(VaultError):
    """A passphrase and its confirmation differ."""


# ==============================================================
# Unlock
# ==============================================================
class UnlockError(VaultError):
    """The vault could not be unlocked."""


class WrongPasswordOrCorrupt(UnlockError):
    """
    Decrypting or parsing the vault file failed.

    Deliberately coarse: a wrong master password and a damaged file look
    the same to the caller.
    """

    def __init__(self, msg: str = "Wrong master password or vault is corrupted!"):
        super().__init__(msg)


class UnlockConfirmationMismatch(UnlockError, ConfirmationMismatchError):
    def __init__(self, msg: str = "Passwords do not match. No vault was created."):
        super().__init__(msg)


# ==============================================================
# Change master password
# ==============================================================
class ChangeError(VaultError):
    """The master password could not be changed."""


class WrongCurrentPassword(ChangeError):
    def __init__(self, msg: str = "Current master password is wrong!"):
        super().__init__(msg)


class ChangeConfirmationMismatch(ChangeError, ConfirmationMismatchError):
    def __init__(self, msg: str = "New passwords do not match!"):
        super().__init__(msg)


# ==============================================================
# Records, storage and codecs
# ==============================================================
class DuplicateError(VaultError):
    def __init__(self, site: str, username: str):
        self.site = site
        self.username = username
        super().__init__(
            f"'{site}' ({username}) already exists, delete and recreate to change."
        )


class RecordNotFoundError(VaultError, LookupError):
    pass


class PersistError(VaultError):
    """Writing the vault file failed. Memory and disk may now disagree."""


class MalformedVaultError(VaultError):
    """Bytes do not hold a valid vault encoding."""


class DecryptionError(VaultError):
    """Ciphertext, key and IV do not form a validly padded block stream."""


class VaultLockedError(VaultError):
    """Operation not allowed in the current vault state."""
