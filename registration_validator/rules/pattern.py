"""Format checks against a regular expression."""

import re

from .base import ValidationRule

# RFC-5322-lite: no leading dot, no '..', local part ends in a non-dot,
# domain labels of letters/digits/'-', alphabetic TLD of 2+ letters.
EMAIL_PATTERN = r"(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}"

NAMED_FORMATS = {
    "email": EMAIL_PATTERN,
}


class PatternRule(ValidationRule):
    """
    The whole value must match a pattern.

    Params take either a named format (format: email) or a raw regular
    expression (pattern: ...). Matching is case-insensitive unless
    ignore_case is false. Named formats always match ASCII only; raw
    patterns do so when ascii is true.
    """

    kind = "pattern"

    def configure(self, params) -> None:
        name = params.get("format")
        pattern = params.get("pattern")
        if name is not None:
            if name not in NAMED_FORMATS:
                raise ValueError(
                    f"Unknown format '{name}'. Known formats: {', '.join(sorted(NAMED_FORMATS))}"
                )
            pattern = NAMED_FORMATS[name]
        if not pattern:
            raise ValueError("pattern rule needs 'format' or 'pattern'")

        flags = re.IGNORECASE if params.get("ignore_case", True) else 0
        # Named formats are ASCII-only, so case folding cannot map e.g. 'ſ' onto 's'
        if name is not None or params.get("ascii", False):
            flags |= re.ASCII
        try:
            self.regex = re.compile(pattern, flags)
        except re.error as e:
            raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        self.format_name = name

    def default_description(self) -> str:
        if self.format_name:
            return f"{self.validates()} must be a valid {self.format_name}"
        return f"{self.validates()} must match {self.regex.pattern}"

    def check(self, value: str) -> bool:
        return self.regex.fullmatch(value) is not None
