"""Family-wide list API endpoints."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gifthub.api.deps import get_auth_context
from gifthub.database import get_session
from gifthub.schemas.auth import FamilyInfo, UserInfo
from gifthub.schemas.family import (
    FamilyGiftResponse,
    FamilyListsResponse,
    MemberWishlistResponse,
    WishlistGiftResponse,
    WishlistsResponse,
)
from gifthub.services.auth_service import AuthContext
from gifthub.services.family_service import build_wishlists, get_family_view

router = APIRouter(prefix="/family", tags=["family"])


@router.get("/lists", response_model=FamilyListsResponse)
def family_lists(
    context: AuthContext = Depends(get_auth_context),
    session: Session = Depends(get_session),
):
    """All members and all gifts of the caller's family, with reservers attached.

    Clients must not show reservation details on the caller's own gifts;
    /family/wishlists does that filtering server-side.
    """
    view = get_family_view(context.family, session)
    return FamilyListsResponse(
        users=[UserInfo(id=m.id, display_name=m.display_name) for m in view.members],
        gifts=[FamilyGiftResponse(**g) for g in view.gifts],
    )


@router.get("/wishlists", response_model=WishlistsResponse)
def family_wishlists(
    context: AuthContext = Depends(get_auth_context),
    session: Session = Depends(get_session),
):
    """Everyone's wishlist as seen by the caller."""
    view = get_family_view(context.family, session)
    wishlists = build_wishlists(view, context.user)
    return WishlistsResponse(
        family=FamilyInfo(id=context.family.id, name=context.family.name, code=context.family.code),
        wishlists=[
            MemberWishlistResponse(
                user_id=w.user_id,
                display_name=w.display_name,
                is_me=w.is_me,
                gifts=[WishlistGiftResponse(**g) for g in w.gifts],
            )
            for w in wishlists
        ],
    )
