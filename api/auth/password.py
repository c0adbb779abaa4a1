"""Password hashing with bcrypt."""

import bcrypt

BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plain text password

    Returns:
        bcrypt hash string (includes salt and cost)
    """
    if not password:
        raise ValueError("Password must not be empty")
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode(
        "ascii"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    Returns False for empty input or a malformed hash.
    """
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        return False
