"""
Role-based scoping of upload records.

Teachers only see their own uploads; school leaders see every upload and
may narrow the view to one teacher. Scoping is applied before records are
handed to the aggregation functions, which have no notion of roles.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel

from .records import UploadRecord

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    """Standard user roles in the system."""
    TEACHER = "TEACHER"
    LEADER = "LEADER"


class UserScope(BaseModel):
    """What a signed-in user may see."""

    user_name: Optional[str] = None
    role: UserRole = UserRole.TEACHER
    teacher_filter: Optional[str] = None  # Leaders only

    @classmethod
    def from_request(
        cls,
        role: Optional[str],
        user_name: Optional[str] = None,
        teacher_filter: Optional[str] = None
    ) -> "UserScope":
        """Build a scope from loosely-typed request parameters."""
        return cls(
            user_name=user_name,
            role=cls._parse_role(role),
            teacher_filter=teacher_filter or None
        )

    @staticmethod
    def _parse_role(role: Optional[str]) -> UserRole:
        if role and role.strip().upper() == UserRole.LEADER.value:
            return UserRole.LEADER
        return UserRole.TEACHER

    @property
    def is_leader(self) -> bool:
        return self.role == UserRole.LEADER

    def can_view_teacher(self, teacher_name: Optional[str]) -> bool:
        if self.is_leader:
            return self.teacher_filter is None or teacher_name == self.teacher_filter
        return self.user_name is not None and teacher_name == self.user_name

    def filter_uploads(self, uploads: Iterable[UploadRecord]) -> List[UploadRecord]:
        """Return the uploads visible to this user."""
        uploads = list(uploads)
        visible = [u for u in uploads if self.can_view_teacher(u.teacher_name)]
        logger.debug(
            f"Scoped {len(uploads)} uploads to {len(visible)} for {self.role.value}",
            extra={"user_name": self.user_name, "teacher_filter": self.teacher_filter}
        )
        return visible
