"""
Password Hashing
Bcrypt hashing for account passwords, through passlib.

Only hashes ever reach the database. The CryptContext marks older
schemes or cost factors as deprecated, so a successful login can
upgrade a stored hash in place (see password_needs_rehash).
"""

from passlib.context import CryptContext

from cookbook_api.core.constants import BCRYPT_ROUNDS


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
    bcrypt__min_rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Return a salted bcrypt hash of `password`.

    Two calls with the same password give different hashes.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a login attempt against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def password_needs_rehash(hashed_password: str) -> bool:
    """True when the stored hash was made with outdated settings."""
    return pwd_context.needs_update(hashed_password)
