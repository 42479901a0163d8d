"""Configuration loading: local config, rule set and message catalog."""

import os
import logging
import yaml
from importlib.resources import files
from typing import Dict, Any, Optional

from jsonschema import validate, ValidationError

from .models import FIELDS

logger = logging.getLogger(__name__)

_RULE_SCHEMA = {
    "type": "object",
    "required": ["rule_id", "kind", "message_key"],
    "properties": {
        "rule_id": {"type": "string", "minLength": 1},
        "kind": {"type": "string", "minLength": 1},
        "message_key": {"type": "string", "minLength": 1},
        "field": {"type": "string", "enum": list(FIELDS)},
        "report_field": {"type": "string", "enum": list(FIELDS)},
        "description": {"type": "string"},
        "params": {"type": "object"},
    },
    "additionalProperties": False,
}

# Shape of form-rules.yaml
RULES_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["fields"],
    "properties": {
        "metadata": {"type": "object"},
        "fields": {
            "type": "object",
            "propertyNames": {"enum": list(FIELDS)},
            "additionalProperties": {
                "type": "object",
                "required": ["rules"],
                "properties": {
                    "optional": {"type": "boolean"},
                    "rules": {"type": "array", "items": _RULE_SCHEMA},
                },
                "additionalProperties": False,
            },
        },
        "cross_field": {
            "type": "array",
            "items": {**_RULE_SCHEMA, "required": ["rule_id", "kind", "message_key", "field"]},
        },
    },
    "additionalProperties": False,
}


class ConfigLoader:
    """Loads the bundled local config and the files it points at."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to a local-config.yaml. Defaults to the one
                bundled in the registration_validator package. Relative file
                names inside it resolve against its directory.

        Raises:
            ValueError: If the rule set does not match RULES_SCHEMA
        """
        if config_path is None:
            config_path = str(files('registration_validator').joinpath('local-config.yaml'))
        self.local_config_path = os.path.abspath(config_path)
        self.local_config = self._load_yaml(self.local_config_path) or {}

        self.rules_config = self._load_relative(
            self.local_config.get("rules_filename", "form-rules.yaml")
        )
        self.validate_rules_config(self.rules_config)

        self.messages = self._load_relative(
            self.local_config.get("messages_filename", "messages.yaml")
        )

        logger.debug(
            "Configuration loaded",
            extra={
                'config_path': self.local_config_path,
                'languages': sorted(self.messages),
            }
        )

    def _load_yaml(self, path: str) -> Dict[str, Any]:
        """Load YAML file from disk."""
        with open(path, encoding='utf-8') as f:
            return yaml.safe_load(f)

    def _load_relative(self, filename: str) -> Dict[str, Any]:
        """Load a YAML file named relative to the local config directory."""
        config_dir = os.path.dirname(self.local_config_path)
        return self._load_yaml(os.path.join(config_dir, filename)) or {}

    @staticmethod
    def validate_rules_config(rules_config: Dict[str, Any]) -> None:
        """
        Check a rule set against RULES_SCHEMA.

        Raises:
            ValueError: On a schema violation, naming its location
        """
        try:
            validate(instance=rules_config, schema=RULES_SCHEMA)
        except ValidationError as e:
            error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
            raise ValueError(f"Invalid rule configuration at {error_path}: {e.message}") from e

    def get_rules_config(self) -> Dict[str, Any]:
        """Get the form rule set."""
        return self.rules_config

    def get_messages(self) -> Dict[str, Any]:
        """Get the message catalog, keyed by language."""
        return self.messages

    def get_default_language(self) -> str:
        return self.local_config.get("default_language", "he")

    def get_submission_config(self) -> Dict[str, Any]:
        """Get submit transport configuration (disabled when absent)."""
        return self.local_config.get("submission") or {'enabled': False}
