"""User models."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId


def _now():
    return datetime.now(timezone.utc)


@dataclass
class User:
    name: str
    email: Optional[str]
    password_hash: Optional[bytes] = None
    mobile: Optional[str] = None
    id: Optional[ObjectId] = None
    created_at: datetime = field(default_factory=_now)

    is_shadow = False

    def to_public(self):
        return {
            "_id": str(self.id) if self.id else None,
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
            "isShadow": self.is_shadow,
        }


@dataclass
class ShadowUser(User):
    """Account created from a name mention during expense entry, not a signup."""

    is_shadow = True

    @staticmethod
    def placeholder_email(name: str, domain: str) -> str:
        return f"{name.replace(' ', '').lower()}@{domain}"

    @classmethod
    def for_name(cls, name: str, domain: str, password_hash: bytes) -> "ShadowUser":
        return cls(
            name=name,
            email=cls.placeholder_email(name, domain),
            password_hash=password_hash,
        )
