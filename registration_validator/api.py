"""
Public API for registration-validator

This is the "front door" used by the form layer: it owns the language
context, runs validation passes and hands accepted records to the submit
transport.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from .config_loader import ConfigLoader
from .messages import MessageCatalog
from .models import ValidationResult
from .submission_proxy import SubmissionProxy
from .validation_engine import FormValidator

logger = logging.getLogger(__name__)


class RegistrationService:
    """
    Registration form service.

    Validation results carry message keys only; the service resolves them to
    text for the active language on request.

    Example:
        from registration_validator import RegistrationService

        service = RegistrationService()
        result = service.validate(form_values)
        if not result.accepted:
            for field, text in service.messages_for(result).items():
                print(f"{field}: {text}")

        service.toggle_language()  # he <-> en
    """

    def __init__(self, config_path: Optional[str] = None, language: Optional[str] = None):
        """
        Initialize registration service with bundled configuration.

        Args:
            config_path: Optional path to a local-config.yaml replacing the
                bundled one
            language: Starting language; defaults to default_language from
                the local config

        Raises:
            ValueError: If the configuration or language is invalid
        """
        self.config_loader = ConfigLoader(config_path)
        self.validator = FormValidator(config_loader=self.config_loader)
        self.catalog = MessageCatalog(self.config_loader.get_messages())
        self.submission_proxy = SubmissionProxy(self.config_loader.get_submission_config())

        self._language = None
        self.set_language(language or self.config_loader.get_default_language())

    @property
    def language(self) -> str:
        return self._language

    @property
    def direction(self) -> str:
        """'rtl' for Hebrew, 'ltr' for English."""
        return self.catalog.direction(self._language)

    def set_language(self, language: str) -> str:
        """
        Switch the active language.

        The rule set is unaffected; only message resolution changes.

        Raises:
            ValueError: If the language has no catalog entry
        """
        if not self.catalog.has_language(language):
            raise ValueError(
                f"Unsupported language '{language}'. Supported: {', '.join(self.catalog.languages())}"
            )
        self._language = language
        logger.debug("Language set", extra={'language': language, 'direction': self.direction})
        return language

    def toggle_language(self) -> str:
        """Switch between Hebrew and English. Returns the new language."""
        return self.set_language("en" if self._language == "he" else "he")

    def validate(self, form) -> ValidationResult:
        """
        Validate form values.

        Args:
            form: SubmissionRecord or mapping of raw form values

        Returns:
            ValidationResult with field → message key errors
        """
        return self.validator.validate(form)

    def validate_field(self, form, field: str) -> Optional[str]:
        """
        Resolved error text for one field, or None (live feedback).

        Raises:
            ValueError: If field is not a form field
        """
        key = self.validator.validate_field(form, field)
        if key is None:
            return None
        return self.catalog.resolve(key, self._language)

    def messages_for(self, result: ValidationResult) -> Dict[str, str]:
        """Resolve a result's message keys to text in the active language."""
        return self.catalog.resolve_errors(dict(result.errors), self._language)

    def submit(self, form) -> Tuple[ValidationResult, Optional[Dict[str, Any]]]:
        """
        Validate and, when accepted, hand the record to the submit transport.

        Returns:
            Tuple of (result, receipt): the ValidationResult of the pass and
            the transport's receipt, or None when the form was rejected
        """
        result = self.validate(form)
        if not result.accepted:
            logger.info(
                "Submission rejected",
                extra={'error_fields': list(result.errors)}
            )
            return result, None
        return result, self.submission_proxy.submit(result.record)

    def discover_rules(self) -> Dict[str, Dict[str, Any]]:
        """Rule metadata keyed by rule id (see FormValidator.discover_rules)."""
        return self.validator.discover_rules()

    def get_messages(self, language: Optional[str] = None) -> Dict[str, Any]:
        """
        Labels, direction and error texts for a language (default: active).

        Raises:
            ValueError: If the language is not supported
        """
        language = language or self._language
        return {
            "language": language,
            "direction": self.catalog.direction(language),
            "labels": self.catalog.labels(language),
            "errors": self.catalog.error_messages(language),
        }
