"""
Password hashing and strength policy.
"""

import bcrypt

PASSWORD_MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes of its input
PASSWORD_MAX_BYTES = 72


def is_valid_password(password: str) -> bool:
    """
    Check a plaintext password against the minimum-strength policy.

    A valid password is 8 to 72 bytes long and contains at least one
    letter, one digit and no whitespace.
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return False
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return False
    if any(c.isspace() for c in password):
        return False
    return any(c.isalpha() for c in password) and any(c.isdigit() for c in password)


def get_password_hash(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt with the given cost factor."""
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")
