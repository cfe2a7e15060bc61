"""Family-wide read views: everyone's lists, with reservation attribution.

``get_family_view`` is the raw join. ``build_wishlists`` is what a client
should render: it groups gifts by owner and hides reservation details on the
viewer's own gifts so surprises stay surprises.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlmodel import Session, col, select

from gifthub.models.gift import Gift
from gifthub.models.user import Family, User

logger = logging.getLogger(__name__)


@dataclass
class FamilyView:
    family: Family
    members: list[User]
    gifts: list[dict[str, Any]]  # gift fields + optional "reserved_by_user"


@dataclass
class MemberWishlist:
    user_id: str
    display_name: str
    is_me: bool
    gifts: list[dict[str, Any]] = field(default_factory=list)


def _public_user(user: User) -> dict[str, str]:
    return {"id": user.id, "display_name": user.display_name}


def get_family_view(family: Family, session: Session) -> FamilyView:
    """All members and gifts of ``family``, each reserved gift tagged with its reserver.

    A reserver id that no longer resolves to a member is left unenriched
    rather than failing the whole view.
    """
    members = list(session.exec(
        select(User).where(User.family_id == family.id).order_by(col(User.created_at).asc())
    ).all())
    gifts = session.exec(
        select(Gift).where(Gift.family_id == family.id).order_by(col(Gift.created_at).desc())
    ).all()

    members_by_id = {m.id: _public_user(m) for m in members}

    enriched = []
    for gift in gifts:
        data = gift.model_dump()
        if gift.reserved_by_user_id:
            reserver = members_by_id.get(gift.reserved_by_user_id)
            if reserver:
                data["reserved_by_user"] = reserver
            else:
                logger.warning(
                    "Gift %s reserved by unknown user %s", gift.id, gift.reserved_by_user_id
                )
        enriched.append(data)

    return FamilyView(family=family, members=members, gifts=enriched)


def _hide_reservation(gift: dict[str, Any]) -> dict[str, Any]:
    hidden = {k: v for k, v in gift.items() if k not in ("reserved_by_user_id", "reserved_by_user")}
    hidden["is_reserved"] = None
    return hidden


def _show_reservation(gift: dict[str, Any]) -> dict[str, Any]:
    shown = dict(gift)
    shown["is_reserved"] = gift.get("reserved_by_user_id") is not None
    return shown


def build_wishlists(view: FamilyView, viewer: User) -> list[MemberWishlist]:
    """Group ``view`` by owner, as seen by ``viewer``.

    The viewer's own list comes back with reservation state removed.
    """
    wishlists = {
        m.id: MemberWishlist(user_id=m.id, display_name=m.display_name, is_me=m.id == viewer.id)
        for m in view.members
    }

    for gift in view.gifts:
        wishlist: Optional[MemberWishlist] = wishlists.get(gift["owner_user_id"])
        if wishlist is None:
            continue
        if wishlist.is_me:
            wishlist.gifts.append(_hide_reservation(gift))
        else:
            wishlist.gifts.append(_show_reservation(gift))

    return list(wishlists.values())
