"""
Tests for rule kinds, RuleLoader and RuleExecutor

Uses small programmatic rule sets rather than the bundled configuration.
"""
import pytest
from registration_validator import FieldRule, FormValidator, SubmissionRecord
from registration_validator.record_view import RecordView
from registration_validator.rule_executor import RuleExecutor
from registration_validator.rule_loader import RuleLoader
from registration_validator.rules import RULE_KINDS, register_predicate
from registration_validator.rules.custom import PREDICATES, min_digits


def make_rule(kind, field="username", message_key="bad", **params):
    """Instantiate a single rule of the given kind."""
    definition = FieldRule(
        rule_id=f"{field}_{kind}",
        field=field,
        kind=kind,
        message_key=message_key,
        params=params,
    )
    return RULE_KINDS[kind](definition)


def view(**values):
    return RecordView(SubmissionRecord(**values))


class TestRuleKinds:
    """Test each rule kind in isolation."""

    def test_required(self):
        """Test that required fails only on the empty string."""
        rule = make_rule("required", message_key="usernameRequired")
        assert rule.run(view(username="")) == ("FAIL", "usernameRequired")
        assert rule.run(view(username=" ")) == ("PASS", "")

    def test_min_length(self):
        """Test the inclusive lower bound."""
        rule = make_rule("min_length", min=3)
        assert rule.check("abc")
        assert not rule.check("ab")

    def test_max_length(self):
        """Test the inclusive upper bound."""
        rule = make_rule("max_length", max=3)
        assert rule.check("abc")
        assert not rule.check("abcd")

    def test_length_needs_integer_bound(self):
        """Test that a non-integer bound is rejected at construction."""
        with pytest.raises(ValueError):
            make_rule("min_length", min="three")
        with pytest.raises(ValueError):
            make_rule("max_length")

    def test_pattern_named_format(self):
        """Test the named email format."""
        rule = make_rule("pattern", field="email", format="email")
        assert rule.check("a@b.com")
        assert not rule.check("a@b")

    def test_pattern_raw_regex(self):
        """Test a raw pattern must match the whole value."""
        rule = make_rule("pattern", pattern=r"[a-z]+", ignore_case=False)
        assert rule.check("alice")
        assert not rule.check("Alice")
        assert not rule.check("alice1")

    def test_pattern_ascii_flag(self):
        """Test that ascii keeps case folding within A-Z."""
        rule = make_rule("pattern", pattern=r"[a-z]+", ascii=True)
        assert rule.check("ALICE")
        assert not rule.check("\u017f")

    def test_pattern_unknown_format(self):
        """Test that an unknown named format is rejected."""
        with pytest.raises(ValueError, match="Unknown format"):
            make_rule("pattern", format="postcode")

    def test_pattern_invalid_regex(self):
        """Test that an invalid regular expression is rejected."""
        with pytest.raises(ValueError, match="Invalid pattern"):
            make_rule("pattern", pattern="(")

    def test_custom_min_digits(self):
        """Test the digit-count predicate through a custom rule."""
        rule = make_rule("custom", field="phone", predicate="min_digits", min=8)
        assert rule.check("(03) 123-4567 8")
        assert not rule.check("123-4567")

    def test_custom_unknown_predicate(self):
        """Test that an unregistered predicate is rejected."""
        with pytest.raises(ValueError, match="Unknown predicate"):
            make_rule("custom", predicate="no_such_predicate")

    def test_register_predicate(self, monkeypatch):
        """Test that registered predicates become available by name."""
        monkeypatch.setattr("registration_validator.rules.custom.PREDICATES", dict(PREDICATES))
        register_predicate("starts_with_letter", lambda value: value[:1].isalpha())
        rule = make_rule("custom", predicate="starts_with_letter")
        assert rule.check("alice")
        assert not rule.check("1alice")

    def test_equals(self):
        """Test cross-field equality over two fields."""
        rule = make_rule("equals", field="password", message_key="passwordsMustMatch",
                         fields=["password", "confirmPassword"])
        assert rule.run(view(password="x", confirmPassword="x")) == ("PASS", "")
        assert rule.run(view(password="x", confirmPassword="y")) == ("FAIL", "passwordsMustMatch")

    def test_equals_needs_two_fields(self):
        """Test that equality over a single field is rejected."""
        with pytest.raises(ValueError):
            make_rule("equals", fields=["password"])

    def test_equals_unknown_field(self):
        """Test that a misspelled field name fails at construction."""
        with pytest.raises(ValueError, match="confirmPasword"):
            make_rule("equals", fields=["password", "confirmPasword"])


class TestMinDigits:
    """Test the phone digit counting helper."""

    @pytest.mark.parametrize("value,expected", [
        ("12345678", True),
        ("1234567", False),
        ("12-34-56-78", True),
        ("+1 (234) 567-8", True),
        ("abc", False),
        ("", False),
        ("١٢٣٤٥٦٧٨", False),
        ("١٢٣٤5678", False),
    ])
    def test_min_digits(self, value, expected):
        """Test that every non-digit is stripped before counting."""
        assert min_digits(value, min=8) is expected


class TestRuleLoader:
    """Test building rules from configuration dicts."""

    def test_field_specs_in_declared_order(self):
        """Test that specs follow form field order, not config order."""
        loader = RuleLoader({"fields": {
            "email": {"rules": [{"rule_id": "e", "kind": "required", "message_key": "k"}]},
            "username": {"rules": [{"rule_id": "u", "kind": "required", "message_key": "k"}]},
        }})
        specs = loader.load_field_specs()
        assert [spec.name for spec in specs] == ["username", "email"]

    def test_unknown_kind(self):
        """Test that an unknown kind fails at load time."""
        loader = RuleLoader({})
        definition = FieldRule(rule_id="x", field="username", kind="magic", message_key="k")
        with pytest.raises(ValueError, match="Unknown rule kind"):
            loader.load_rules([definition])

    def test_unknown_field(self):
        """Test that a rule set for an unknown field is rejected."""
        loader = RuleLoader({"fields": {"age": {"rules": []}}})
        with pytest.raises(ValueError, match="Unknown form fields"):
            loader.load_field_specs()

    def test_cross_field_needs_field(self):
        """Test that cross-field rules must name the field they attach to."""
        loader = RuleLoader({"cross_field": [
            {"rule_id": "m", "kind": "equals", "message_key": "k"}
        ]})
        with pytest.raises(ValueError):
            loader.load_cross_field()

    def test_invalid_params_name_the_rule(self):
        """Test that param errors mention the offending rule id."""
        loader = RuleLoader({})
        definition = FieldRule(rule_id="username_min", field="username",
                               kind="min_length", message_key="k", params={"min": -1})
        with pytest.raises(ValueError, match="username_min"):
            loader.load_rules([definition])


class TestRuleExecutor:
    """Test chain execution."""

    def test_chain_stops_at_first_failure(self):
        """Test that rules after the first failure are NORUN."""
        rules = [
            make_rule("required"),
            make_rule("min_length", min=10),
            make_rule("max_length", max=1),
        ]
        results = RuleExecutor(view(username="abc")).execute_chain("username", rules)
        assert [r["status"] for r in results] == ["PASS", "FAIL", "NORUN"]

    def test_optional_empty_skips_chain(self):
        """Test that an empty optional field runs nothing."""
        rules = [make_rule("custom", field="phone", predicate="min_digits", min=8)]
        results = RuleExecutor(view(phone="")).execute_chain("phone", rules, optional=True)
        assert [r["status"] for r in results] == ["NORUN"]

    def test_raising_rule_reports_error(self, monkeypatch):
        """Test that an exception inside a rule becomes an ERROR result."""
        def explode(value):
            raise RuntimeError("boom")

        monkeypatch.setitem(PREDICATES, "explode", explode)
        rule = make_rule("custom", message_key="usernameBroken", predicate="explode")
        result = RuleExecutor(view(username="x")).execute_rule(rule)
        assert result["status"] == "ERROR"
        assert result["message_key"] == "usernameBroken"


class TestProgrammaticRuleSet:
    """Test FormValidator with an in-memory rule set."""

    def test_custom_rule_set(self):
        """Test a validator built from a dict instead of the bundled file."""
        validator = FormValidator(rules_config={"fields": {
            "username": {"rules": [
                {"rule_id": "u_min", "kind": "min_length", "params": {"min": 5},
                 "message_key": "tooShort"},
            ]},
        }})
        assert validator.validate({"username": "alice"}).accepted
        assert validator.validate({"username": "bob"}).errors == {"username": "tooShort"}

    def test_raising_rule_never_escapes_validate(self, monkeypatch):
        """Test that validate reports a raising rule as a field error."""
        def explode(value):
            raise RuntimeError("boom")

        monkeypatch.setitem(PREDICATES, "explode", explode)
        validator = FormValidator(rules_config={"fields": {
            "email": {"rules": [
                {"rule_id": "e", "kind": "custom", "params": {"predicate": "explode"},
                 "message_key": "emailBroken"},
            ]},
        }})
        result = validator.validate({"email": "a@b.com"})
        assert result.errors == {"email": "emailBroken"}

    def test_schema_violation(self):
        """Test that a malformed rule set is rejected with its location."""
        with pytest.raises(ValueError, match="Invalid rule configuration"):
            FormValidator(rules_config={"fields": {
                "username": {"rules": [{"rule_id": "u", "kind": "required"}]},
            }})

    def test_unknown_field_rejected_by_schema(self):
        """Test that the schema only admits form fields."""
        with pytest.raises(ValueError, match="Invalid rule configuration"):
            FormValidator(rules_config={"fields": {"age": {"rules": []}}})

    def test_duplicate_rule_ids(self):
        """Test that rule ids must be unique."""
        rule = {"rule_id": "dup", "kind": "required", "message_key": "k"}
        with pytest.raises(ValueError, match="Duplicate rule ids"):
            FormValidator(rules_config={"fields": {
                "username": {"rules": [rule]},
                "email": {"rules": [rule]},
            }})
