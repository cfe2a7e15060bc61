"""Gift reservation state machine.

A gift is either unreserved or reserved by exactly one family member.
Both transitions are written as conditional UPDATEs so two members racing
for the same gift cannot both win.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import or_, update
from sqlmodel import Session, col

from gifthub.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from gifthub.models.gift import Gift
from gifthub.models.user import User

logger = logging.getLogger(__name__)


def _load_family_gift(user: User, gift_id: str, session: Session) -> Gift:
    gift = session.get(Gift, gift_id)
    if not gift:
        raise NotFoundError("Gift not found")
    if gift.family_id != user.family_id:
        raise ForbiddenError("Gift is not in your family")
    return gift


def reserve_gift(user: User, gift_id: str, session: Session) -> Gift:
    """Reserve a gift for the caller.

    Reserving a gift the caller already holds succeeds without change.
    """
    gift = _load_family_gift(user, gift_id, session)

    if gift.owner_user_id == user.id:
        raise ValidationError("Cannot reserve your own gift")
    if gift.reserved_by_user_id and gift.reserved_by_user_id != user.id:
        raise ConflictError("Gift already reserved by someone else")

    result = session.execute(
        update(Gift)
        .where(
            col(Gift.id) == gift_id,
            or_(
                col(Gift.reserved_by_user_id).is_(None),
                col(Gift.reserved_by_user_id) == user.id,
            ),
        )
        .values(reserved_by_user_id=user.id, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        # Someone else reserved it after we read it
        session.rollback()
        raise ConflictError("Gift already reserved by someone else")

    session.commit()
    session.refresh(gift)
    logger.info("User %s reserved gift %s", user.id, gift_id)
    return gift


def unreserve_gift(user: User, gift_id: str, session: Session) -> Gift:
    """Release the caller's reservation. Only the current reserver may do this."""
    gift = _load_family_gift(user, gift_id, session)

    if not gift.reserved_by_user_id:
        raise ValidationError("Gift is not reserved")
    if gift.reserved_by_user_id != user.id:
        raise ForbiddenError("Only the reserver can unreserve this gift")

    result = session.execute(
        update(Gift)
        .where(
            col(Gift.id) == gift_id,
            col(Gift.reserved_by_user_id) == user.id,
        )
        .values(reserved_by_user_id=None, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        session.rollback()
        session.refresh(gift)
        if not gift.reserved_by_user_id:
            raise ValidationError("Gift is not reserved")
        raise ForbiddenError("Only the reserver can unreserve this gift")

    session.commit()
    session.refresh(gift)
    logger.info("User %s released gift %s", user.id, gift_id)
    return gift
