"""Family creation, join and identity API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gifthub.api.deps import get_auth_context
from gifthub.database import get_session
from gifthub.models.user import Family, User
from gifthub.schemas.auth import (
    CreateFamilyRequest,
    FamilyInfo,
    JoinFamilyRequest,
    MembershipResponse,
    MeResponse,
    UserInfo,
)
from gifthub.services.auth_service import (
    AuthContext,
    Membership,
    create_family,
    join_family,
)

router = APIRouter(tags=["auth"])


def _family_info(family: Family) -> FamilyInfo:
    return FamilyInfo(id=family.id, name=family.name, code=family.code)


def _user_info(user: User) -> UserInfo:
    return UserInfo(id=user.id, display_name=user.display_name)


def _membership_to_response(membership: Membership) -> MembershipResponse:
    return MembershipResponse(
        token=membership.token,
        family=_family_info(membership.family),
        user=_user_info(membership.user),
    )


@router.post("/families", response_model=MembershipResponse, status_code=status.HTTP_201_CREATED)
def create_new_family(request: CreateFamilyRequest, session: Session = Depends(get_session)):
    """Create a family and its first member. Returns a token and the family code."""
    membership = create_family(request.name, request.display_name, session)
    return _membership_to_response(membership)


@router.post("/auth/join", response_model=MembershipResponse, status_code=status.HTTP_201_CREATED)
def join_existing_family(request: JoinFamilyRequest, session: Session = Depends(get_session)):
    """Join a family using its code. No auth required."""
    membership = join_family(request.family_code, request.display_name, session)
    return _membership_to_response(membership)


@router.get("/me", response_model=MeResponse)
def get_me(context: AuthContext = Depends(get_auth_context)):
    """Current user and family, including the code to share with relatives."""
    return MeResponse(user=_user_info(context.user), family=_family_info(context.family))
