"""Participant Resolver - maps participant names to user ids."""
import logging
from dataclasses import replace
from typing import List, Sequence

from bcrypt import gensalt, hashpw
from bson import ObjectId

from splitledger.errors import ValidationError
from splitledger.expenses.models import ParticipantShare
from splitledger.stores.base import UserStore
from splitledger.users.model import ShadowUser

logger = logging.getLogger(__name__)


class ParticipantResolver:
    """Looks users up by exact name, creating shadow accounts on a miss."""

    def __init__(
        self,
        user_store: UserStore,
        email_domain: str = "example.com",
        shadow_password: str = "defaultpassword"
    ):
        self.user_store = user_store
        self.email_domain = email_domain
        self.shadow_password = shadow_password
        self._shadow_hash = None

    @property
    def shadow_password_hash(self) -> bytes:
        if self._shadow_hash is None:
            self._shadow_hash = hashpw(self.shadow_password.encode(), gensalt())
        return self._shadow_hash

    def resolve(self, name: str) -> ObjectId:
        if not name or not name.strip():
            raise ValidationError("User name is required")

        user = self.user_store.find_by_name(name)
        if user:
            return user.id

        # Two concurrent requests naming the same new user can both land here.
        shadow = ShadowUser.for_name(name, self.email_domain, self.shadow_password_hash)
        created = self.user_store.create(shadow)
        logger.info("Created shadow account %s for %r", created.id, name)
        return created.id

    def resolve_shares(self, shares: Sequence[ParticipantShare]) -> List[ParticipantShare]:
        return [replace(share, user_id=self.resolve(share.name)) for share in shares]
