"""Cross-field equality: every listed field must hold the same value."""

from typing import List, Tuple

from ..models import FIELDS
from .base import ValidationRule


class EqualsRule(ValidationRule):
    """
    Compares several fields and reports against report_field.

    Example definition:
        rule_id: passwords_match
        kind: equals
        field: password
        params: {fields: [password, confirmPassword]}
        report_field: confirmPassword
    """

    kind = "equals"

    def configure(self, params) -> None:
        fields = list(params.get("fields") or [])
        if len(fields) < 2:
            raise ValueError("equals rule needs at least two 'fields'")
        unknown = [name for name in fields if name not in FIELDS]
        if unknown:
            raise ValueError(f"equals rule names unknown form fields: {', '.join(unknown)}")
        self.fields = fields

    def reads(self) -> List[str]:
        return list(self.fields)

    def default_description(self) -> str:
        return f"{' and '.join(self.fields)} must match"

    def check(self, values: List[str]) -> bool:
        return all(value == values[0] for value in values[1:])

    def run(self, record) -> Tuple[str, str]:
        if self.check([record.value(name) for name in self.fields]):
            return ("PASS", "")
        return ("FAIL", self.message_key())
