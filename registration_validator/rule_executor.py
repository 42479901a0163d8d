import logging
from typing import List, Dict, Any, Optional

from .record_view import RecordView

logger = logging.getLogger(__name__)


class RuleExecutor:
    """Executes field rule chains in declared order with first-failure short-circuit"""

    def __init__(self, record_view: RecordView):
        """
        Initialize rule executor.

        Args:
            record_view: View over the submission being validated
        """
        self.record = record_view

    def execute_chain(self, field: str, rules: List[Any], optional: bool = False) -> List[Dict[str, Any]]:
        """
        Execute one field's rules in order.

        The first rule that does not pass ends the chain; every later rule is
        marked NORUN. An optional field with an empty value skips the whole
        chain.

        Args:
            field: Field name the chain belongs to
            rules: Rule objects in evaluation order
            optional: Skip every rule when the field value is empty

        Returns:
            One result dict per rule, in order
        """
        if optional and self.record.value(field) == "":
            return [self._mark_skipped(rule, "Optional field is empty, rule skipped") for rule in rules]

        results = []
        failed = False
        for rule in rules:
            if failed:
                results.append(self._mark_skipped(rule, "Earlier rule failed, rule skipped"))
                continue
            result = self.execute_rule(rule)
            results.append(result)
            failed = result["status"] != "PASS"
        return results

    def execute_rule(self, rule: Any, skip_reason: Optional[str] = None) -> Dict[str, Any]:
        """Execute a single rule; a rule that raises counts as ERROR."""
        if skip_reason:
            return self._mark_skipped(rule, skip_reason)

        try:
            status, message_key = rule.run(self.record)
        except Exception as e:
            logger.error(
                "Rule raised during evaluation",
                extra={'rule_id': rule.get_id(), 'error': f"{type(e).__name__}: {e}"}
            )
            status = "ERROR"
            message_key = rule.message_key()

        return {
            "rule_id": rule.get_id(),
            "field": rule.reports(),
            "description": rule.description(),
            "status": status,
            "message_key": message_key,
        }

    def _mark_skipped(self, rule: Any, reason: str) -> Dict[str, Any]:
        """Mark a rule as not run."""
        return {
            "rule_id": rule.get_id(),
            "field": rule.reports(),
            "description": rule.description(),
            "status": "NORUN",
            "message_key": "",
            "reason": reason,
        }
