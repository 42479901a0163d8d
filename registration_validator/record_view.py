"""
Access-tracking view over a SubmissionRecord.

Rules read form values through this view rather than from the record
directly, so discover_rules() can report which fields each rule depends on.

FIELD → RECORD ATTRIBUTE:
- username → username
- email → email
- phone → phone
- password → password
- confirm_password → confirmPassword
- profile_picture → profilePicture
"""

from typing import Any, List

from .models import SubmissionRecord


class RecordView:
    """Stable, read-only interface to a submission record."""

    def __init__(self, record: SubmissionRecord, track_access: bool = False):
        self._record = record
        self._track_access = track_access
        self._accesses: dict = {}  # field name → None, ordered + deduplicated

    def _record_access(self, name: str):
        """Record field access for dependency tracking."""
        if self._track_access:
            self._accesses[name] = None

    def get_accesses(self) -> List[str]:
        """Return the field names read so far, ordered by first access."""
        return list(self._accesses.keys())

    def value(self, name: str) -> str:
        """Read a string field by its form name (e.g. 'confirmPassword')."""
        self._record_access(name)
        return self._record.get(name)

    @property
    def username(self) -> str:
        return self.value("username")

    @property
    def email(self) -> str:
        return self.value("email")

    @property
    def phone(self) -> str:
        return self.value("phone")

    @property
    def password(self) -> str:
        return self.value("password")

    @property
    def confirm_password(self) -> str:
        return self.value("confirmPassword")

    @property
    def profile_picture(self) -> Any:
        self._record_access("profilePicture")
        return self._record.profilePicture

    def __repr__(self) -> str:
        return f"RecordView(username='{self._record.username}', email='{self._record.email}')"
