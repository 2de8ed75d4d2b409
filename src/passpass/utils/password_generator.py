import secrets

from passpass.config.config_vault import CHAR_CHOICES, PASSWORD_LENGTH


def gen_password(length: int = PASSWORD_LENGTH,
    numbers: bool = True,
    lowers: bool = True,
    uppers: bool = True,
    punctuations: bool = True,
    spaces: bool = True) -> str:
    """
    Generate a cryptographically secure random password.

    Every character is drawn uniformly from the union of the enabled
    character pools. Randomness is provided by the `secrets` module.

    Args:
        length: Number of characters.
        numbers: Include digits.
        lowers: Include lower case letters.
        uppers: Include upper case letters.
        punctuations: Include the characters in CHAR_CHOICES["punctuations"].
        spaces: Include the space character.

    Returns:
        The generated password.

    Raises:
        ValueError: If length is negative or every pool is disabled.
    """
    if length < 0:
        raise ValueError(f"Password length {length} is negative")

    selected = {
        "numbers": numbers,
        "lowers": lowers,
        "uppers": uppers,
        "punctuations": punctuations,
        "spaces": spaces,
    }
    chars = "".join(CHAR_CHOICES[name] for name, on in selected.items() if on)
    if not chars:
        raise ValueError("At least one character set must be enabled")

    return "".join(secrets.choice(chars) for _ in range(length))
