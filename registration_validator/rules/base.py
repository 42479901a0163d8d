"""
Abstract base class for validation rules.

Every rule kind inherits from ValidationRule and implements check().
The rule executor passes the record view to run() on every pass; rule
objects hold no per-pass state and are shared across passes.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from ..models import FieldRule


class ValidationRule(ABC):
    """
    Abstract base class for all rule kinds.

    A rule is built from its declarative FieldRule definition. Rules read
    form values through the RecordView handed to run() so that field
    dependencies can be tracked.
    """

    #: Kind name used in the rule configuration (e.g. 'min_length')
    kind = None

    def __init__(self, definition: FieldRule):
        """
        Initialize the rule from its definition.

        Args:
            definition: Declarative FieldRule (id, field, params, message key)

        Raises:
            ValueError: If the definition's params are invalid for this kind
        """
        self.definition = definition
        self.configure(definition.params)

    def configure(self, params) -> None:
        """Read kind-specific parameters. Default: no parameters."""

    def get_id(self) -> str:
        """Return unique rule identifier (e.g. 'username_min')."""
        return self.definition.rule_id

    def validates(self) -> str:
        """Return the field this rule is attached to."""
        return self.definition.field

    def reports(self) -> str:
        """Return the field a failure is reported against."""
        return self.definition.target

    def reads(self) -> List[str]:
        """Return the fields this rule's check reads."""
        return [self.definition.field]

    def message_key(self) -> str:
        return self.definition.message_key

    def description(self) -> str:
        """Return plain English description of what this rule checks."""
        return self.definition.description or self.default_description()

    @abstractmethod
    def default_description(self) -> str:
        """Description used when the rule definition does not supply one."""

    @abstractmethod
    def check(self, value: str) -> bool:
        """Return True when the field value satisfies the rule."""

    def run(self, record) -> Tuple[str, str]:
        """
        Execute the validation rule.

        Args:
            record: RecordView over the submission being validated

        Returns:
            Tuple of (status, message_key) where:
            - status: "PASS" | "FAIL"
            - message_key: Message key for FAIL, empty string for PASS
        """
        if self.check(record.value(self.definition.field)):
            return ("PASS", "")
        return ("FAIL", self.message_key())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule_id='{self.get_id()}', field='{self.validates()}')"
