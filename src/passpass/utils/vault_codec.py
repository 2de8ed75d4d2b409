"""
Plaintext encoding of the record set and the on-disk container format.

The decrypted vault is a compact JSON array of record objects. The vault
file holds two lines, the base64 ciphertext followed by the base64 IV.
"""
import base64
import binascii
import json
from typing import Iterable, List, Tuple

from passpass.config.config_vault import UTF8, IV_LEN
from .Record import Record
from .vault_errors import MalformedVaultError


def serialize(records: Iterable[Record]) -> bytes:
    """
    Serialize records to compact JSON bytes.

    Args:
        records: Records in vault order.

    Returns:
        UTF-8 encoded JSON bytes. Identical input yields identical output.
    """
    return json.dumps(
        [record.to_dict() for record in records],
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode(UTF8)


def deserialize(raw: bytes) -> List[Record]:
    """
    Deserialize records from JSON bytes.

    Args:
        raw: UTF-8 encoded JSON bytes produced by `serialize`.

    Returns:
        Records in stored order.

    Raises:
        MalformedVaultError: If the bytes are not a valid record array.
    """
    if not isinstance(raw, (bytes, bytearray)):
        raise TypeError("Input must be bytes")

    try:
        data = json.loads(raw.decode(UTF8))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedVaultError("Vault data is not valid JSON") from e

    if not isinstance(data, list):
        raise MalformedVaultError("Vault data must be a list of records")

    try:
        return [Record.from_dict(item) for item in data]
    except (TypeError, KeyError, ValueError) as e:
        raise MalformedVaultError(f"Invalid record in vault data: {e}") from e


def encode_vault_file(ciphertext: bytes, iv: bytes) -> str:
    """Build the two-line vault file text."""
    return "\n".join(
        base64.b64encode(part).decode("ascii") for part in (ciphertext, iv)
    )


def decode_vault_file(text: str) -> Tuple[bytes, bytes]:
    """
    Split vault file text into ciphertext and IV.

    A single trailing newline is tolerated.

    Raises:
        MalformedVaultError: If the text does not hold exactly two base64
            lines or the IV has the wrong length.
    """
    lines = text.rstrip("\r\n").split("\n")
    if len(lines) != 2:
        raise MalformedVaultError(f"Expected 2 lines in vault file, found {len(lines)}")

    try:
        ciphertext, iv = (
            base64.b64decode(line.strip(), validate=True) for line in lines
        )
    except (binascii.Error, ValueError) as e:
        raise MalformedVaultError("Vault file is not valid base64") from e

    if len(iv) != IV_LEN:
        raise MalformedVaultError(f"IV must be {IV_LEN} bytes, found {len(iv)}")

    return ciphertext, iv
