"""
User Directory
==============

Keeps the id -> display name mapping for everyone who can sell.

Users are not created here by hand: whenever a caller shows up with a
verified token that carries a ``name`` claim, the directory records (or
refreshes) that user. Listings use it to check the seller exists and to show
the seller's name.
"""

import logging
from typing import Optional

from fungimart.models import CurrentUser, User
from fungimart.services.json_store import JsonDocumentStore

logger = logging.getLogger(__name__)


class UserDirectory(JsonDocumentStore):

    COLLECTION_NAME = "users"

    def get_user(self, user_id: str) -> Optional[User]:
        doc = self._get(user_id)
        return User(**doc) if doc else None

    def exists(self, user_id: str) -> bool:
        return self._get(user_id) is not None

    def display_name(self, user_id: str) -> Optional[str]:
        doc = self._get(user_id)
        return doc.get("full_name") if doc else None

    def record_user(self, current_user: CurrentUser) -> Optional[User]:
        """
        Record a caller seen with a verified token.

        Only callers whose token carries a display name are recorded. Writes
        to disk only if something actually changed.
        """
        if not current_user.full_name:
            return self.get_user(current_user.id)

        user = User(id=current_user.id, full_name=current_user.full_name, email=current_user.email)
        existing = self._get(user.id)
        if existing != user.model_dump():
            self._put(user.id, user.model_dump())
            logger.info(f"Recorded user {user.id} ({user.full_name})")
        return user
