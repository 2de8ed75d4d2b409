import string

import pytest

from passpass.config.config_vault import CHAR_CHOICES, PASSWORD_LENGTH
from passpass.utils.password_generator import gen_password


def test_default_length():
    assert PASSWORD_LENGTH == 72
    assert len(gen_password()) == 72


def test_default_pools():
    allowed = set("".join(CHAR_CHOICES.values()))
    assert set(gen_password(500)) <= allowed


def test_numbers_only():
    pw = gen_password(50, lowers=False, uppers=False, punctuations=False, spaces=False)
    assert len(pw) == 50
    assert set(pw) <= set(string.digits)


def test_excluded_pools_never_appear():
    pw = gen_password(500, spaces=False, punctuations=False)
    assert " " not in pw
    assert not set(pw) & set(".!?,;-_")


def test_zero_length():
    assert gen_password(0) == ""


def test_passwords_differ():
    assert gen_password() != gen_password()


def test_all_pools_disabled():
    with pytest.raises(ValueError):
        gen_password(10, numbers=False, lowers=False, uppers=False,
                     punctuations=False, spaces=False)


def test_negative_length():
    with pytest.raises(ValueError):
        gen_password(-1)
