"""
Message catalog - default translation collaborator.

Resolves language-independent message keys (e.g. 'usernameMin') to display
text for the active language. The validator itself never sees text; any
object with the same resolve() signature can replace this catalog.
"""

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class MessageCatalog:
    """Looks up form labels and error messages per language."""

    def __init__(self, messages: Dict[str, Any]):
        """
        Args:
            messages: Catalog keyed by language code:
                {"he": {"direction": "rtl", "register": {..., "errors": {...}}}}

        Raises:
            ValueError: If the catalog is empty
        """
        if not messages:
            raise ValueError("Message catalog has no languages")
        self._messages = messages

    def languages(self) -> List[str]:
        return list(self._messages)

    def has_language(self, language: str) -> bool:
        return language in self._messages

    def direction(self, language: str) -> str:
        """Text direction for a language: 'rtl' or 'ltr'."""
        return self._language(language).get("direction", "ltr")

    def labels(self, language: str) -> Dict[str, str]:
        """Form labels (title, placeholders, submit) without error messages."""
        register = self._language(language).get("register", {})
        return {k: v for k, v in register.items() if k != "errors"}

    def error_messages(self, language: str) -> Dict[str, str]:
        """Every error message for a language, keyed by message key."""
        return dict(self._language(language).get("register", {}).get("errors", {}))

    def resolve(self, key: str, language: str) -> str:
        """
        Resolve a message key to text.

        An unknown key resolves to the key itself.
        """
        errors = self._language(language).get("register", {}).get("errors", {})
        text = errors.get(key)
        if text is None:
            logger.warning(
                "Missing translation",
                extra={'message_key': key, 'language': language}
            )
            return key
        return text

    def resolve_errors(self, errors: Dict[str, str], language: str) -> Dict[str, str]:
        """Resolve a field → message key mapping to field → text."""
        return {field: self.resolve(key, language) for field, key in errors.items()}

    def _language(self, language: str) -> Dict[str, Any]:
        if language not in self._messages:
            raise ValueError(
                f"Unsupported language '{language}'. Supported: {', '.join(self._messages)}"
            )
        return self._messages[language] or {}
