"""Required field: the value must not be the empty string."""

from .base import ValidationRule


class RequiredRule(ValidationRule):
    """Fails on an empty value. Whitespace counts as a value."""

    kind = "required"

    def default_description(self) -> str:
        return f"{self.validates()} is required"

    def check(self, value: str) -> bool:
        return len(value) > 0
