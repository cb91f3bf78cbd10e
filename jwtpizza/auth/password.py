"""
Password hashing with Argon2id.

Only hashes are ever persisted. Verification failures of any kind (wrong
password, malformed hash) report False so callers can fail uniformly.
"""

import secrets
import string

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

# Configure Argon2id with secure parameters
ph = PasswordHasher(
    time_cost=3,        # Number of iterations
    memory_cost=65536,  # 64 MB memory usage
    parallelism=4,      # Number of parallel threads
    hash_len=32,        # Length of the hash in bytes
    salt_len=16,        # Length of the random salt
)

# Verified against when the email is unknown, so both login failure paths
# cost one Argon2 verification.
_DUMMY_HASH = ph.hash(secrets.token_urlsafe(16))


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash

    Returns:
        The hashed password string (includes algorithm, params, salt, and hash)
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its hash.

    Returns:
        True if password matches, False otherwise
    """
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError):
        # Hash is malformed - treat as verification failure
        return False


def burn_verification(password: str) -> None:
    """Spend the same work as a real verification, discarding the result."""
    verify_password(password, _DUMMY_HASH)


def needs_rehash(password_hash: str) -> bool:
    """
    Check if a password hash was produced with outdated parameters.

    After a successful login, check this and rehash if needed.
    """
    try:
        return ph.check_needs_rehash(password_hash)
    except InvalidHashError:
        return True


def generate_temp_password(length: int = 16) -> str:
    """
    Generate a random temporary password.

    Used for the bootstrap admin account when no password is configured.
    """
    if length < 12:
        length = 12

    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    return "".join(secrets.choice(alphabet) for _ in range(length))
