"""Family view schemas."""

from typing import Optional

from pydantic import BaseModel

from gifthub.schemas.auth import FamilyInfo, UserInfo
from gifthub.schemas.gift import GiftResponse


class FamilyGiftResponse(GiftResponse):
    reserved_by_user: Optional[UserInfo] = None


class FamilyListsResponse(BaseModel):
    users: list[UserInfo]
    gifts: list[FamilyGiftResponse]


class WishlistGiftResponse(FamilyGiftResponse):
    # None on the viewer's own gifts: the owner is not told
    is_reserved: Optional[bool] = None


class MemberWishlistResponse(BaseModel):
    user_id: str
    display_name: str
    is_me: bool
    gifts: list[WishlistGiftResponse]


class WishlistsResponse(BaseModel):
    family: FamilyInfo
    wishlists: list[MemberWishlistResponse]
