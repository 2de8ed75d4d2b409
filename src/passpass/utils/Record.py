from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class Record:
    """
    Represents a single vault record.

    Records are immutable once created. The (site, username) pair
    identifies a record inside the vault.
    """
    site: str
    username: str
    password: str

    def __post_init__(self):
        """
        Validate field types.

        Empty strings are allowed, anything that is not a str is not.
        """
        for name in ("site", "username", "password"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be a string")

    def __repr__(self):
        return (
            f"Record(site={self.site!r}, "
            f"username={self.username!r}, "
            f"password=<hidden>)"
        )

    @property
    def identity(self) -> tuple[str, str]:
        return (self.site, self.username)

    def to_dict(self) -> dict:
        """
        Serialize record to a dictionary.

        Returns:
            Dictionary representation of the record, password in plaintext.
        """
        return {
            "site": self.site,
            "username": self.username,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        """
        Create a record from stored data.

        Args:
            data: Mapping holding exactly site, username and password.

        Returns:
            Reconstructed Record instance.

        Raises:
            TypeError: If data is not a dict or a field is not a string.
            KeyError: If a field is missing.
            ValueError: If unknown fields are present.
        """
        if not isinstance(data, dict):
            raise TypeError("Record data must be a dict")

        extra = set(data) - {"site", "username", "password"}
        if extra:
            raise ValueError(f"Unknown record fields: {sorted(extra)}")

        return cls(
            site=data["site"],
            username=data["username"],
            password=data["password"],
        )


class ListedRecord(NamedTuple):
    """Listing row. Never carries the password."""
    index: int
    site: str
    username: str
