from passlib.context import CryptContext

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=12,
    bcrypt__min_rounds=12,
)

# bcrypt ignores (or rejects) anything past 72 bytes
MAX_BCRYPT_BYTES = 72


def truncate_password(password: str) -> str:
    """Trim a password so its UTF-8 encoding fits in MAX_BCRYPT_BYTES."""
    truncated = password
    while len(truncated.encode("utf-8")) > MAX_BCRYPT_BYTES:
        truncated = truncated[:-1]
    return truncated


def hash_password(password: str) -> str:
    return pwd_context.hash(truncate_password(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(truncate_password(plain_password), hashed_password)


def needs_rehash(hashed_password: str) -> bool:
    """True when a stored hash uses weaker settings than ``pwd_context``."""
    return pwd_context.needs_update(hashed_password)
