"""Family creation, join and identity schemas."""

from typing import Optional

from pydantic import BaseModel


# --- Requests ---

class CreateFamilyRequest(BaseModel):
    name: Optional[str] = None
    display_name: Optional[str] = None


class JoinFamilyRequest(BaseModel):
    family_code: Optional[str] = None
    display_name: Optional[str] = None


# --- Responses ---

class FamilyInfo(BaseModel):
    id: str
    name: str
    code: str


class UserInfo(BaseModel):
    id: str
    display_name: str


class MembershipResponse(BaseModel):
    token: str
    family: FamilyInfo
    user: UserInfo


class MeResponse(BaseModel):
    user: UserInfo
    family: FamilyInfo
