"""Identity & membership business logic.

Creating and joining families, issuing credentials, and resolving a bearer
credential back to the (user, family) pair every other service works with.
Credentials are stateless JWTs: there is no server-side revocation, so a
logout only drops the token on the client.
"""

import logging
from dataclasses import dataclass

import jwt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from gifthub.config import settings
from gifthub.errors import AuthError, ConflictError, NotFoundError, ValidationError
from gifthub.models.user import Family, User
from gifthub.utils.security import (
    create_access_token,
    decode_token,
    generate_family_code,
    normalize_family_code,
)

logger = logging.getLogger(__name__)


@dataclass
class AuthContext:
    """The authenticated caller, resolved once per request."""

    user: User
    family: Family


@dataclass
class Membership:
    token: str
    family: Family
    user: User


def issue_credential(user: User) -> str:
    return create_access_token(user.id, user.family_id)


def _allocate_family_code(session: Session) -> str:
    """Pick a code not used by any family, giving up after a bounded number of retries.

    The unique index on families.code still has the final word; a code that
    collides after the retries run out fails at commit time.
    """
    code = generate_family_code()
    for _ in range(settings.family_code_retries):
        taken = session.exec(select(Family.id).where(Family.code == code)).first()
        if taken is None:
            return code
        logger.warning("Family code %s already taken, regenerating", code)
        code = generate_family_code()
    return code


def create_family(name: str, display_name: str, session: Session) -> Membership:
    """Create a family together with its first member and log that member in."""
    name = (name or "").strip()
    display_name = (display_name or "").strip()
    if not name or not display_name:
        raise ValidationError("name and display_name are required")

    code = _allocate_family_code(session)
    try:
        family = Family(name=name, code=code)
        session.add(family)
        session.flush()

        user = User(family_id=family.id, display_name=display_name)
        session.add(user)
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.error("Could not allocate a unique family code (last tried %s)", code)
        raise ConflictError("Could not allocate a unique family code, please try again")

    session.refresh(family)
    session.refresh(user)
    logger.info("Created family %s (%s) with first member %s", family.id, family.code, user.id)

    return Membership(token=issue_credential(user), family=family, user=user)


def join_family(code: str, display_name: str, session: Session) -> Membership:
    """Add a new member to the family owning ``code``. Anyone with the code may join."""
    code = normalize_family_code(code or "")
    display_name = (display_name or "").strip()
    if not code or not display_name:
        raise ValidationError("family_code and display_name are required")

    family = session.exec(select(Family).where(Family.code == code)).first()
    if not family:
        raise NotFoundError("Family not found")

    user = User(family_id=family.id, display_name=display_name)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("User %s joined family %s", user.id, family.id)

    return Membership(token=issue_credential(user), family=family, user=user)


def authenticate(token: str | None, session: Session) -> AuthContext:
    """Resolve a bearer credential to the caller's user and family."""
    if not token:
        raise AuthError("Missing token")

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired credential")
        raise AuthError("Invalid or expired token")
    except jwt.PyJWTError as e:
        logger.warning("Rejected credential: %s", e)
        raise AuthError("Invalid or expired token")

    if payload.get("type") != "access":
        raise AuthError("Invalid token type")

    user = session.get(User, payload["sub"])
    if not user:
        raise AuthError("User not found")

    if payload.get("fam") and payload["fam"] != user.family_id:
        raise AuthError("Invalid token")

    family = session.get(Family, user.family_id)
    if not family:
        raise AuthError("Family not found")

    return AuthContext(user=user, family=family)
