import secrets
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

ph = PasswordHasher(time_cost=3, memory_cost=65536, parallelism=4)


def hash_secret(secret: str) -> str:
    return ph.hash(secret)


def verify_secret(stored_hash: str, secret: str) -> bool:
    try:
        return ph.verify(stored_hash, secret)
    except (VerifyMismatchError, InvalidHashError):
        return False


def generate_token() -> str:
    return secrets.token_hex(32)
