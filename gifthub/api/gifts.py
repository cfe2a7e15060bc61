"""Gift list and reservation API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gifthub.api.deps import get_current_user
from gifthub.database import get_session
from gifthub.models.gift import Gift
from gifthub.models.user import User
from gifthub.schemas.gift import (
    DeleteResponse,
    GiftCreateRequest,
    GiftResponse,
    GiftUpdateRequest,
)
from gifthub.services.gift_service import (
    create_gift,
    delete_gift,
    edit_gift,
    get_gift,
    list_own_gifts,
)
from gifthub.services.reservation_service import reserve_gift, unreserve_gift

router = APIRouter(tags=["gifts"])


def _gift_to_response(gift: Gift) -> GiftResponse:
    return GiftResponse(**gift.model_dump())


@router.get("/lists/me", response_model=list[GiftResponse])
def my_list(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Current user's gifts, newest first."""
    return [_gift_to_response(g) for g in list_own_gifts(user, session)]


@router.post("/lists/me/items", response_model=GiftResponse, status_code=status.HTTP_201_CREATED)
def add_to_my_list(
    request: GiftCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Add a gift to the current user's list."""
    gift = create_gift(user, request.model_dump(exclude_unset=True), session)
    return _gift_to_response(gift)


@router.get("/gifts/{gift_id}", response_model=GiftResponse)
def read_gift(
    gift_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Get a single gift of the caller's family."""
    return _gift_to_response(get_gift(user, gift_id, session))


@router.patch("/gifts/{gift_id}", response_model=GiftResponse)
def update_gift(
    gift_id: str,
    request: GiftUpdateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Edit a gift. Owner only."""
    gift = edit_gift(user, gift_id, request.model_dump(exclude_unset=True), session)
    return _gift_to_response(gift)


@router.delete("/gifts/{gift_id}", response_model=DeleteResponse)
def remove_gift(
    gift_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete a gift. Owner only."""
    delete_gift(user, gift_id, session)
    return DeleteResponse(success=True)


@router.post("/gifts/{gift_id}/reserve", response_model=GiftResponse)
def reserve(
    gift_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Reserve a relative's gift. Cannot reserve your own."""
    return _gift_to_response(reserve_gift(user, gift_id, session))


@router.post("/gifts/{gift_id}/unreserve", response_model=GiftResponse)
def unreserve(
    gift_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Release your reservation on a gift."""
    return _gift_to_response(unreserve_gift(user, gift_id, session))
