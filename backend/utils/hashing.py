# utils/hashing.py
from werkzeug.security import check_password_hash, generate_password_hash


def get_password_hash(password: str) -> str:
    return generate_password_hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, plain_password)
