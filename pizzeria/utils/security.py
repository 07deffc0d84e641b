# pizzeria/utils/security.py
from passlib.context import CryptContext

# Initialize password context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash (e.g. legacy plaintext row)
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
