"""Length bounds, measured in characters."""

from .base import ValidationRule


def _bound(params, name: str, kind: str) -> int:
    value = params.get(name)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{kind} rule needs a non-negative integer '{name}', got {value!r}")
    return value


class MinLengthRule(ValidationRule):
    kind = "min_length"

    def configure(self, params) -> None:
        self.minimum = _bound(params, "min", self.kind)

    def default_description(self) -> str:
        return f"{self.validates()} must be at least {self.minimum} characters"

    def check(self, value: str) -> bool:
        return len(value) >= self.minimum


class MaxLengthRule(ValidationRule):
    kind = "max_length"

    def configure(self, params) -> None:
        self.maximum = _bound(params, "max", self.kind)

    def default_description(self) -> str:
        return f"{self.validates()} must be at most {self.maximum} characters"

    def check(self, value: str) -> bool:
        return len(value) <= self.maximum
