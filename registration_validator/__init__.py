"""
registration-validator: Validation core for a bilingual registration form

This library provides:
- A declarative rule set for the registration fields (YAML configured)
- Per-field first-failure evaluation with optional fields and
  cross-field rules
- Message keys resolved per language (Hebrew/English, RTL/LTR)
- A JSON-RPC adapter for form front ends in other languages

Example:
    from registration_validator import FormValidator

    validator = FormValidator()
    result = validator.validate({"username": "alice", ...})
    if not result.accepted:
        print(result.errors)   # {"confirmPassword": "passwordsMustMatch"}
"""

from .api import RegistrationService
from .models import FieldRule, FieldSpec, SubmissionRecord, ValidationResult
from .validation_engine import FormValidator, get_validator

__version__ = "0.1.0"
__all__ = [
    "FieldRule",
    "FieldSpec",
    "FormValidator",
    "RegistrationService",
    "SubmissionRecord",
    "ValidationResult",
    "get_validator",
]
