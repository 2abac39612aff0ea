"""
Password hashing utilities
"""

import logging
import bcrypt

from config.settings import BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Salted bcrypt hash of ``password`` at the given work factor"""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a plaintext password with a stored hash; malformed hashes never match"""
    if not password_hash or not isinstance(password_hash, (str, bytes)):
        return False
    if isinstance(password_hash, str):
        password_hash = password_hash.encode("utf-8")
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash)
    except (TypeError, ValueError) as e:
        logger.warning(f"Stored password hash could not be checked: {e}")
        return False
