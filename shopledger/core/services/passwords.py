"""Salted password hashing for user accounts."""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password as an Argon2 modular crypt string."""
    return pwd_context.hash(password)


def verify_password(password: str, encoded: str) -> bool:
    """Check a password against a stored hash; unrecognised hashes never match."""
    try:
        return pwd_context.verify(password, encoded)
    except ValueError:
        return False
