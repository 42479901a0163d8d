"""
Rule kinds for the registration form.

RULE_KINDS maps the kind name used in form-rules.yaml to its rule class.
"""

from .base import ValidationRule
from .custom import CustomRule, register_predicate
from .equals import EqualsRule
from .length import MaxLengthRule, MinLengthRule
from .pattern import PatternRule
from .required import RequiredRule

RULE_KINDS = {
    cls.kind: cls
    for cls in (RequiredRule, MinLengthRule, MaxLengthRule, PatternRule, CustomRule, EqualsRule)
}

__all__ = [
    'RULE_KINDS',
    'ValidationRule',
    'RequiredRule',
    'MinLengthRule',
    'MaxLengthRule',
    'PatternRule',
    'CustomRule',
    'EqualsRule',
    'register_predicate',
]
