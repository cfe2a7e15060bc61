"""Gift registry business logic: a member's own wish list."""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session, col, select

from gifthub.errors import ForbiddenError, NotFoundError, ValidationError
from gifthub.models.gift import Gift, Priority
from gifthub.models.user import User

logger = logging.getLogger(__name__)

# Fields an owner may set; everything else on a gift is system-managed
EDITABLE_FIELDS = ("title", "description", "link", "price", "priority")

PRIORITIES = {p.value for p in Priority}


def _clean_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Keep only editable keys and validate the ones that are present."""
    cleaned = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}

    if "title" in cleaned:
        title = cleaned["title"]
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("title is required")
        cleaned["title"] = title.strip()

    if "priority" in cleaned:
        priority = cleaned["priority"]
        if isinstance(priority, Priority):
            priority = priority.value
        if priority not in PRIORITIES:
            raise ValidationError("priority must be one of: high, medium, low")
        cleaned["priority"] = priority

    price = cleaned.get("price")
    if price is not None and (not math.isfinite(price) or price < 0):
        raise ValidationError("price must be a non-negative number")

    return cleaned


def list_own_gifts(user: User, session: Session) -> list[Gift]:
    """Current user's gifts, newest first."""
    return list(session.exec(
        select(Gift).where(
            Gift.family_id == user.family_id,
            Gift.owner_user_id == user.id,
        ).order_by(col(Gift.created_at).desc())
    ).all())


def get_gift(user: User, gift_id: str, session: Session) -> Gift:
    """Fetch a gift visible to ``user`` (any gift of their family)."""
    gift = session.get(Gift, gift_id)
    if not gift:
        raise NotFoundError("Gift not found")
    if gift.family_id != user.family_id:
        raise ForbiddenError("Gift is not in your family")
    return gift


def _get_owned_gift(user: User, gift_id: str, session: Session, action: str) -> Gift:
    gift = session.get(Gift, gift_id)
    if not gift:
        raise NotFoundError("Gift not found")
    if gift.owner_user_id != user.id:
        raise ForbiddenError(f"Not allowed to {action} this gift")
    return gift


def create_gift(user: User, fields: dict[str, Any], session: Session) -> Gift:
    """Add a gift to the caller's own list."""
    if "title" not in fields:
        raise ValidationError("title is required")
    # An empty priority means "not chosen"
    if not fields.get("priority"):
        fields = {**fields, "priority": Priority.MEDIUM.value}

    cleaned = _clean_fields(fields)
    gift = Gift(
        family_id=user.family_id,
        owner_user_id=user.id,
        **cleaned,
    )
    session.add(gift)
    session.commit()
    session.refresh(gift)
    logger.info("User %s added gift %s", user.id, gift.id)
    return gift


def edit_gift(user: User, gift_id: str, patch: dict[str, Any], session: Session) -> Gift:
    """Apply a partial update. Only keys present in ``patch`` are touched."""
    gift = _get_owned_gift(user, gift_id, session, "edit")

    for key, value in _clean_fields(patch).items():
        setattr(gift, key, value)
    gift.updated_at = datetime.now(timezone.utc)

    session.add(gift)
    session.commit()
    session.refresh(gift)
    return gift


def delete_gift(user: User, gift_id: str, session: Session) -> None:
    gift = _get_owned_gift(user, gift_id, session, "delete")
    session.delete(gift)
    session.commit()
    logger.info("User %s deleted gift %s", user.id, gift_id)
