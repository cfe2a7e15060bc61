"""Gift request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class GiftCreateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    price: Optional[float] = None
    priority: Optional[str] = None  # 'high' | 'medium' | 'low'


class GiftUpdateRequest(BaseModel):
    """Partial update: only fields sent by the client are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    price: Optional[float] = None
    priority: Optional[str] = None


class GiftResponse(BaseModel):
    id: str
    family_id: str
    owner_user_id: str
    title: str
    description: Optional[str] = None
    link: Optional[str] = None
    price: Optional[float] = None
    priority: str
    reserved_by_user_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class DeleteResponse(BaseModel):
    success: bool
