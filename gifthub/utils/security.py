"""Security utilities: JWT credentials and family code generation."""

import secrets
from datetime import datetime, timedelta, timezone

import jwt

from gifthub.config import settings


# --- JWT Credentials ---

def create_access_token(user_id: str, family_id: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "fam": family_id,
        "iat": now,
        "exp": now + timedelta(days=settings.credential_expire_days),
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )


# --- Family Code ---

def generate_family_code() -> str:
    """Generate a random join code, e.g. 'K7QX2M'."""
    alphabet = settings.family_code_alphabet
    return "".join(secrets.choice(alphabet) for _ in range(settings.family_code_length))


def normalize_family_code(code: str) -> str:
    """Codes are typed by people: ignore surrounding whitespace and case."""
    return code.strip().upper()
