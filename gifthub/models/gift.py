"""Gift model."""

import secrets
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Gift(SQLModel, table=True):
    __tablename__ = "gifts"

    id: str = Field(default_factory=lambda: f"gft_{secrets.token_hex(4)}", primary_key=True)
    family_id: str = Field(foreign_key="families.id", index=True)
    owner_user_id: str = Field(foreign_key="users.id", index=True)
    title: str
    description: Optional[str] = None
    link: Optional[str] = None
    price: Optional[float] = None
    priority: str = Field(default=Priority.MEDIUM.value)  # 'high' | 'medium' | 'low'
    # Not a foreign key: a reserver may be deleted and leave a dangling id behind
    reserved_by_user_id: Optional[str] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
