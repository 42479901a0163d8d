"""
Data model for the registration form validator.

FieldRule / FieldSpec describe the static rule set, SubmissionRecord is the
read-only snapshot of form values for one validation pass, and
ValidationResult is what a pass hands back to the UI layer.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

# Declared field order; also the order errors are reported in.
FIELDS = ("username", "email", "phone", "password", "confirmPassword")


@dataclass(frozen=True)
class FieldRule:
    """One validation rule for one field."""

    rule_id: str
    field: str
    kind: str
    message_key: str
    params: Mapping[str, Any] = field(default_factory=dict)
    report_field: Optional[str] = None
    description: str = ""

    @property
    def target(self) -> str:
        """Field the failure of this rule is reported against."""
        return self.report_field or self.field


@dataclass(frozen=True)
class FieldSpec:
    """A field's ordered rule chain."""

    name: str
    rules: Tuple[FieldRule, ...]
    optional: bool = False


@dataclass(frozen=True)
class SubmissionRecord:
    """Snapshot of the registration form at the moment validation runs."""

    username: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    confirmPassword: str = ""
    # Opaque file reference, carried along but never validated
    profilePicture: Any = field(default=None, compare=False)

    @classmethod
    def from_form(cls, data) -> "SubmissionRecord":
        """
        Build a record from raw form values.

        Absent or None string fields become "", other non-string values are
        converted with str(). An existing SubmissionRecord is returned as-is.
        """
        if isinstance(data, cls):
            return data
        data = data or {}
        values = {}
        for name in FIELDS:
            value = data.get(name)
            if value is None:
                value = ""
            elif not isinstance(value, str):
                value = str(value)
            values[name] = value
        return cls(profilePicture=data.get("profilePicture"), **values)

    def get(self, name: str) -> str:
        if name not in FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def to_dict(self, include_secrets: bool = True) -> dict:
        """Return the string fields as a dict, optionally without passwords."""
        result = {name: getattr(self, name) for name in FIELDS}
        if not include_secrets:
            result.pop("password")
            result.pop("confirmPassword")
        result["profilePicture"] = self.profilePicture
        return result


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass."""

    accepted: bool
    errors: Mapping[str, str] = field(default_factory=dict)
    record: Optional[SubmissionRecord] = None

    def __post_init__(self):
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    def to_dict(self) -> dict:
        return {"accepted": self.accepted, "errors": dict(self.errors)}
