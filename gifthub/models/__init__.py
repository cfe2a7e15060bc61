"""GiftHub Database Models."""

from gifthub.models.user import Family, User
from gifthub.models.gift import Gift, Priority

__all__ = [
    "Family",
    "User",
    "Gift",
    "Priority",
]
