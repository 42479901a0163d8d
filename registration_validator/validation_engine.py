import logging
from typing import List, Dict, Any, Optional, Tuple

from .config_loader import ConfigLoader
from .models import FIELDS, SubmissionRecord, ValidationResult
from .record_view import RecordView
from .rule_executor import RuleExecutor
from .rule_loader import RuleLoader

logger = logging.getLogger(__name__)


class FormValidator:
    """Registration form validation, independent of rendering and transport"""

    def __init__(self, rules_config: Optional[dict] = None, config_loader=None):
        """
        Build the immutable rule set.

        Args:
            rules_config: Rule configuration dict (form-rules.yaml layout).
                When omitted it is taken from config_loader.
            config_loader: ConfigLoader instance; a default one is created when
                neither argument is given.

        Raises:
            ValueError: If the rule configuration is invalid
        """
        if rules_config is None:
            if config_loader is None:
                config_loader = ConfigLoader()
            rules_config = config_loader.get_rules_config()
        else:
            ConfigLoader.validate_rules_config(rules_config)

        self.metadata = dict(rules_config.get("metadata", {}))

        loader = RuleLoader(rules_config)
        self.field_specs = loader.load_field_specs()
        self._chains = tuple(
            (spec, tuple(loader.load_rules(spec.rules))) for spec in self.field_specs
        )
        self._cross_field = tuple(loader.load_rules(loader.load_cross_field()))

        rule_ids = [rule.get_id() for rule in self._all_rules()]
        duplicates = sorted({r for r in rule_ids if rule_ids.count(r) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule ids: {', '.join(duplicates)}")

        logger.debug(
            "Form validator initialized",
            extra={'fields': [spec.name for spec in self.field_specs], 'rule_count': len(rule_ids)}
        )

    def _all_rules(self) -> List[Any]:
        rules = [rule for _, chain in self._chains for rule in chain]
        rules.extend(self._cross_field)
        return rules

    def validate(self, record) -> ValidationResult:
        """
        Evaluate a submission against every rule.

        Each field reports at most one error: the first failing rule in its
        declared order. Cross-field rules report only against a field that
        has no error yet.

        Args:
            record: SubmissionRecord or a mapping of raw form values

        Returns:
            ValidationResult; record is set only when accepted
        """
        record = SubmissionRecord.from_form(record)
        _, errors = self._evaluate(record)
        accepted = not errors

        logger.debug(
            "Validation pass complete",
            extra={'accepted': accepted, 'error_fields': list(errors)}
        )
        return ValidationResult(
            accepted=accepted,
            errors=errors,
            record=record if accepted else None,
        )

    def validate_field(self, record, field: str) -> Optional[str]:
        """
        Return the message key for one field, or None when it is valid.

        Used for live feedback on blur/change. Includes cross-field rules
        reported against the field.

        Raises:
            ValueError: If field is not a form field
        """
        if field not in FIELDS:
            raise ValueError(f"Unknown form field: {field}")
        return self.validate(record).errors.get(field)

    def explain(self, record) -> List[Dict[str, Any]]:
        """
        Per-rule trace of a validation pass.

        Returns:
            List of result dicts in evaluation order:
            [{
                "rule_id": str,
                "field": str,
                "description": str,
                "status": "PASS" | "FAIL" | "NORUN" | "ERROR",
                "message_key": str,
                "reason": str   # NORUN only
            }, ...]
        """
        trace, _ = self._evaluate(SubmissionRecord.from_form(record))
        return trace

    def discover_rules(self) -> Dict[str, Dict[str, Any]]:
        """
        Discover all rules and their metadata.

        Returns:
            Dict mapping rule_id to:
            - rule_id: Unique identifier
            - field: Field the rule is attached to
            - report_field: Field a failure is reported against
            - kind: Rule kind
            - params: Kind-specific parameters
            - message_key: Message key reported on failure
            - description: Human-readable description
            - optional: Whether the rule's field is optional
            - field_dependencies: Form fields the rule reads
        """
        optional_fields = {spec.name for spec in self.field_specs if spec.optional}
        result = {}
        for rule in self._all_rules():
            # Run against an empty record to capture field accesses
            view = RecordView(SubmissionRecord(), track_access=True)
            try:
                rule.run(view)
            except Exception:
                pass  # Only the access pattern matters here
            definition = rule.definition
            result[rule.get_id()] = {
                "rule_id": rule.get_id(),
                "field": definition.field,
                "report_field": rule.reports(),
                "kind": definition.kind,
                "params": dict(definition.params),
                "message_key": definition.message_key,
                "description": rule.description(),
                "optional": definition.field in optional_fields and rule not in self._cross_field,
                "field_dependencies": view.get_accesses() or rule.reads(),
            }
        return result

    def _evaluate(self, record: SubmissionRecord) -> Tuple[List[Dict[str, Any]], Dict[str, str]]:
        """Run every chain, then the cross-field rules. Returns (trace, errors)."""
        executor = RuleExecutor(RecordView(record))
        trace = []
        errors = {}

        for spec, rules in self._chains:
            results = executor.execute_chain(spec.name, rules, optional=spec.optional)
            trace.extend(results)
            for result in results:
                if result["status"] in ("FAIL", "ERROR"):
                    errors.setdefault(result["field"], result["message_key"])
                    break

        for rule in self._cross_field:
            target = rule.reports()
            skip_reason = None
            if target in errors:
                skip_reason = f"{target} already has an error, rule skipped"
            result = executor.execute_rule(rule, skip_reason=skip_reason)
            trace.append(result)
            if result["status"] in ("FAIL", "ERROR"):
                errors[target] = result["message_key"]

        ordered = {name: errors[name] for name in FIELDS if name in errors}
        return trace, ordered


_default_validator: Optional[FormValidator] = None


def get_validator() -> FormValidator:
    """Get or build the FormValidator for the bundled rule set."""
    global _default_validator
    if _default_validator is None:
        _default_validator = FormValidator()
    return _default_validator


def reset_validator():
    """Reset the shared validator (for testing)."""
    global _default_validator
    _default_validator = None
