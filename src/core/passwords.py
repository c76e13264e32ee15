"""
Password hashing and verification.

Uses bcrypt, which generates a fresh random salt for every hash and embeds it
(along with the work factor) in the resulting digest.
"""
import bcrypt

BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    """Hash a password with bcrypt. Two calls with the same input give different digests."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of a password against a bcrypt digest. Never raises."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
