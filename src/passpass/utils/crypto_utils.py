import hashlib
import secrets
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from passpass.config.config_vault import KDF_ITERATIONS, KEY_LEN, IV_LEN
from .vault_errors import DecryptionError


def derive_key(pw: bytes, iterations: int = KDF_ITERATIONS) -> bytes:
    """
    Derive a symmetric encryption key from a master password.

    Applies SHA-256 repeatedly, each round hashing the digest of the
    previous one, starting from the raw password bytes. The final digest
    is used directly as the AES key.

    Args:
        pw: Master password as raw bytes.
        iterations: Number of SHA-256 rounds. Must match the value the
            vault was written with.

    Returns:
        A 32-byte key.

    Raises:
        ValueError: If iterations is smaller than 1.

    Security:
        - The round count makes every password guess expensive.
        - No salt is used. The same password yields the same key everywhere.
    """
    if iterations < 1:
        raise ValueError("iterations must be at least 1")

    key = bytes(pw)
    for _ in range(iterations):
        key = hashlib.sha256(key).digest()
    return key


def new_iv() -> bytes:
    """Fresh random IV. Never reuse one with the same key."""
    return secrets.token_bytes(IV_LEN)


def encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """
    Encrypt plaintext using AES-256-CBC with PKCS7 padding.

    Args:
        plaintext: Bytes to encrypt.
        key: 32-byte key from `derive_key`.
        iv: 16-byte initialization vector. Must be freshly random for
            every call, see `new_iv`.

    Returns:
        The ciphertext, a whole number of AES blocks.

    Raises:
        ValueError: If the key or IV length is invalid.

    Security:
        - Reusing an IV with the same key leaks plaintext structure.
        - The IV is not secret and is stored next to the ciphertext.
    """
    if len(key) != KEY_LEN:
        raise ValueError(f"key must be {KEY_LEN} bytes")

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """
    Decrypt an AES-256-CBC payload produced by `encrypt`.

    Args:
        ciphertext: Encrypted bytes.
        key: Key used during encryption.
        iv: IV used during encryption.

    Returns:
        The plaintext bytes.

    Raises:
        DecryptionError: If the padding is invalid, the ciphertext is not
            block aligned, or the key/IV have the wrong size.

    Security:
        - CBC has no authentication tag. A wrong key is only detected
          through invalid padding, and rarely not at all, so callers must
          still validate the plaintext.
        - Wrong key and corrupted data raise the same error.
    """
    try:
        if len(key) != KEY_LEN:
            raise ValueError(f"key must be {KEY_LEN} bytes")

        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        raise DecryptionError("Decryption failed") from e
