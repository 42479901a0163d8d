"""
Custom predicate rules.

A custom rule names a predicate from PREDICATES (predicate: min_digits) and
passes its remaining params to it as keyword arguments. Programmatic rule sets
can register further predicates with register_predicate().
"""

import re
from typing import Callable, Dict

from .base import ValidationRule

# [0-9] only; Unicode digits from other scripts do not count
NON_DIGIT = re.compile(r"\D", re.ASCII)

Predicate = Callable[..., bool]


def min_digits(value: str, min: int) -> bool:
    """At least `min` digit characters once every non-digit is stripped."""
    return len(NON_DIGIT.sub("", value)) >= min


PREDICATES: Dict[str, Predicate] = {
    "min_digits": min_digits,
}


def register_predicate(name: str, predicate: Predicate) -> None:
    """Make a predicate available to 'custom' rules by name."""
    PREDICATES[name] = predicate


class CustomRule(ValidationRule):
    kind = "custom"

    def configure(self, params) -> None:
        name = params.get("predicate")
        if name not in PREDICATES:
            raise ValueError(
                f"Unknown predicate {name!r}. Known predicates: {', '.join(sorted(PREDICATES))}"
            )
        self.predicate_name = name
        self.predicate = PREDICATES[name]
        self.arguments = {k: v for k, v in params.items() if k != "predicate"}

    def default_description(self) -> str:
        args = ", ".join(f"{k}={v}" for k, v in self.arguments.items())
        return f"{self.validates()} must satisfy {self.predicate_name}({args})"

    def check(self, value: str) -> bool:
        return bool(self.predicate(value, **self.arguments))
