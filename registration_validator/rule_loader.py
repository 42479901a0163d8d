"""
Rule Loader - Declarative Rule Set to Rule Instances

Turns the rule configuration (form-rules.yaml, or an equivalent dict) into
FieldRule definitions and then into rule objects.

## How It Works

1. Each field in `fields` lists its rules in evaluation order
2. Every rule names a `kind` (required, min_length, max_length, pattern,
   custom, equals)
3. The loader looks the kind up in RULE_KINDS and instantiates the class
   with the FieldRule definition
4. Kind classes validate their own params at construction time, so a bad
   rule set fails at load time rather than during a validation pass

Cross-field rules live in `cross_field`; they name the field they are
attached to and optionally a `report_field`.
"""

from typing import Any, Dict, List, Tuple

from .models import FIELDS, FieldRule, FieldSpec
from .rules import RULE_KINDS


class RuleLoader:
    """Builds rule objects from a rule configuration dict"""

    def __init__(self, config: dict):
        """
        Initialize rule loader.

        Args:
            config: Rule configuration dict (see form-rules.yaml)
        """
        self.config = config

    def load_field_specs(self) -> Tuple[FieldSpec, ...]:
        """
        Build the per-field rule chains in declared field order.

        Returns:
            Tuple of FieldSpec, one per configured field

        Raises:
            ValueError: If a field name or rule definition is invalid
        """
        fields_config = self.config.get("fields", {})
        unknown = set(fields_config) - set(FIELDS)
        if unknown:
            raise ValueError(f"Unknown form fields in rule set: {', '.join(sorted(unknown))}")

        specs = []
        for name in FIELDS:
            if name not in fields_config:
                continue
            field_config = fields_config[name] or {}
            rules = tuple(
                self._definition(rule_config, name)
                for rule_config in field_config.get("rules", [])
            )
            specs.append(FieldSpec(name=name, rules=rules, optional=bool(field_config.get("optional", False))))
        return tuple(specs)

    def load_cross_field(self) -> Tuple[FieldRule, ...]:
        """Build the cross-field rule definitions."""
        definitions = []
        for rule_config in self.config.get("cross_field", []):
            if "field" not in rule_config:
                raise ValueError(f"Cross-field rule {rule_config.get('rule_id')} needs a 'field'")
            definitions.append(self._definition(rule_config, rule_config["field"]))
        return tuple(definitions)

    def load_rules(self, definitions) -> List[Any]:
        """
        Instantiate rule objects for a sequence of definitions.

        Args:
            definitions: Iterable of FieldRule

        Returns:
            List of rule objects, in the same order

        Raises:
            ValueError: If a kind is unknown or its params are invalid
        """
        return [self._load_single_rule(definition) for definition in definitions]

    def _load_single_rule(self, definition: FieldRule) -> Any:
        rule_class = RULE_KINDS.get(definition.kind)
        if rule_class is None:
            raise ValueError(
                f"Unknown rule kind '{definition.kind}' in rule {definition.rule_id}. "
                f"Known kinds: {', '.join(sorted(RULE_KINDS))}"
            )
        try:
            return rule_class(definition)
        except ValueError as e:
            raise ValueError(f"Invalid rule {definition.rule_id}: {e}") from e

    def _definition(self, rule_config: Dict[str, Any], field: str) -> FieldRule:
        for key in ("rule_id", "kind", "message_key"):
            if not rule_config.get(key):
                raise ValueError(f"Rule on field '{field}' is missing '{key}': {rule_config}")
        report_field = rule_config.get("report_field")
        if report_field is not None and report_field not in FIELDS:
            raise ValueError(f"Rule {rule_config['rule_id']} reports against unknown field '{report_field}'")
        return FieldRule(
            rule_id=rule_config["rule_id"],
            field=field,
            kind=rule_config["kind"],
            message_key=rule_config["message_key"],
            params=dict(rule_config.get("params") or {}),
            report_field=report_field,
            description=rule_config.get("description", ""),
        )
