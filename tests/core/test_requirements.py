"""Requirements Engine - tests for tag parsing, rule evaluation and accumulation.

Tests cover:
    - parse_rules accepts the four rules and rejects malformed tags at declaration
    - define_record builds immutable schemas and rejects duplicate fields
    - required / email / min / max semantics per field type
    - Boundaries: equal to the bound passes, one unit outside fails
    - Violations accumulate across fields and across rules of one field
    - verify_requirements raises RequirementsError with every violation
"""

import pytest
from pydantic import BaseModel

from tasktracker.core.domain_types import FieldType, RuleName
from tasktracker.core.errors import RequirementsError, SchemaDefinitionError
from tasktracker.core.requirements import (
    Email, Max, Min, Required,
    check_requirements, define_record, parse_rules, verify_requirements,
)


class _Applicant(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""
    age: int = 0
    money: float = 0.0
    is_verified: bool = False


APPLICANT_RECORD = define_record(
    "Applicant",
    ("username", FieldType.TEXT, "required"),
    ("email", FieldType.TEXT, "required;email"),
    ("password", FieldType.TEXT, "required;min=8;max=20"),
    ("age", FieldType.INTEGER, "required;min=18;max=60"),
    ("money", FieldType.FLOAT, "required;min=100;max=1000"),
    ("is_verified", FieldType.BOOLEAN, "required"),
)


def _valid_applicant(**overrides) -> _Applicant:
    data = {
        "username": "dmvnicolas",
        "email": "dmvnicolas@gmail.com",
        "password": "83nicomoreno19",
        "age": 18,
        "money": 525.5,
        "is_verified": True,
    }
    data.update(overrides)
    return _Applicant(**data)


def _rules_by_field(violations) -> list[tuple[str, RuleName]]:
    return [(v.field, v.rule) for v in violations]


# ─── parse_rules ─────────────────────────────────────────────────

def test_parse_rules_keeps_declaration_order():
    rules = parse_rules("required;min=8;max=30", FieldType.TEXT)
    assert rules == (Required(), Min(8), Max(30))


def test_parse_rules_empty_tag_has_no_rules():
    assert parse_rules("", FieldType.TEXT) == ()
    assert parse_rules("   ", FieldType.INTEGER) == ()


def test_parse_rules_accepts_signed_bounds_and_spaces():
    assert parse_rules(" min=-5 ; max=+5 ", FieldType.INTEGER) == (Min(-5), Max(5))


def test_parse_rules_email_on_text():
    assert parse_rules("required;email", FieldType.TEXT) == (Required(), Email())


@pytest.mark.parametrize("tag", [
    "unique",
    "required;lowercase",
    "between=1",
])
def test_unknown_rule_is_schema_defect(tag):
    with pytest.raises(SchemaDefinitionError, match="not available"):
        parse_rules(tag, FieldType.TEXT)


@pytest.mark.parametrize("tag", ["min=eight", "max=1.5", "min=8a"])
def test_non_integer_bound_is_schema_defect(tag):
    with pytest.raises(SchemaDefinitionError, match="should be an integer"):
        parse_rules(tag, FieldType.TEXT)


@pytest.mark.parametrize("tag", ["min", "max=", "required;min= "])
def test_bound_without_value_is_schema_defect(tag):
    with pytest.raises(SchemaDefinitionError, match="has no value"):
        parse_rules(tag, FieldType.INTEGER)


def test_empty_entry_is_schema_defect():
    with pytest.raises(SchemaDefinitionError, match="empty rule entry"):
        parse_rules("required;;min=1", FieldType.TEXT)


def test_required_with_argument_is_schema_defect():
    with pytest.raises(SchemaDefinitionError, match="takes no value"):
        parse_rules("required=true", FieldType.TEXT)


def test_email_on_numeric_field_is_schema_defect():
    with pytest.raises(SchemaDefinitionError, match="only applies to text"):
        parse_rules("email", FieldType.INTEGER)


def test_min_on_boolean_field_is_schema_defect():
    with pytest.raises(SchemaDefinitionError, match="boolean"):
        parse_rules("min=1", FieldType.BOOLEAN)


# ─── define_record ───────────────────────────────────────────────

def test_define_record_keeps_field_order():
    assert APPLICANT_RECORD.field_names == [
        "username", "email", "password", "age", "money", "is_verified",
    ]


def test_define_record_names_record_and_field_in_defect():
    with pytest.raises(SchemaDefinitionError, match="Broken.age"):
        define_record("Broken", ("age", FieldType.INTEGER, "min=ten"))


def test_define_record_rejects_duplicate_field():
    with pytest.raises(SchemaDefinitionError, match="declared twice"):
        define_record(
            "Twice",
            ("title", FieldType.TEXT, "required"),
            ("title", FieldType.TEXT, "max=10"),
        )


def test_record_schema_is_immutable():
    with pytest.raises(AttributeError):
        APPLICANT_RECORD.name = "Other"


# ─── Valid records ───────────────────────────────────────────────

def test_valid_record_has_no_violations():
    assert check_requirements(APPLICANT_RECORD, _valid_applicant()) == []


def test_verify_requirements_returns_none_when_valid():
    assert verify_requirements(APPLICANT_RECORD, _valid_applicant()) is None


def test_mapping_records_are_supported():
    record = _valid_applicant().model_dump()
    assert check_requirements(APPLICANT_RECORD, record) == []


def test_fields_without_rules_are_ignored():
    schema = define_record("Note", ("body", FieldType.TEXT, ""))
    assert check_requirements(schema, {"body": ""}) == []


# ─── required ────────────────────────────────────────────────────

@pytest.mark.parametrize("username", ["", "   ", "\t\n"])
def test_required_text_rejects_empty_and_whitespace(username):
    violations = check_requirements(
        APPLICANT_RECORD, _valid_applicant(username=username),
    )
    assert _rules_by_field(violations) == [("username", RuleName.REQUIRED)]


def test_required_integer_treats_zero_as_missing():
    violations = check_requirements(APPLICANT_RECORD, _valid_applicant(age=0))
    assert ("age", RuleName.REQUIRED) in _rules_by_field(violations)
    assert violations[0].message == "'age' is required"


def test_required_float_treats_zero_as_missing():
    violations = check_requirements(APPLICANT_RECORD, _valid_applicant(money=0.0))
    assert ("money", RuleName.REQUIRED) in _rules_by_field(violations)


def test_required_boolean_needs_true():
    violations = check_requirements(
        APPLICANT_RECORD, _valid_applicant(is_verified=False),
    )
    assert _rules_by_field(violations) == [("is_verified", RuleName.REQUIRED)]


def test_absent_mapping_key_reads_as_zero_value():
    record = _valid_applicant().model_dump()
    del record["username"]
    violations = check_requirements(APPLICANT_RECORD, record)
    assert _rules_by_field(violations) == [("username", RuleName.REQUIRED)]


# ─── email ───────────────────────────────────────────────────────

@pytest.mark.parametrize("email", [
    "user@example.com",
    "first.last+tag@sub.example.co",
    "a@b",
])
def test_email_accepts_conservative_shapes(email):
    assert check_requirements(APPLICANT_RECORD, _valid_applicant(email=email)) == []


@pytest.mark.parametrize("email", [
    "not-an-email",
    "user@",
    "@domain.com",
    "user@-domain.com",
    "user@domain-.com",
    "user@domain..com",
    "user name@example.com",
    "user@example.com\n",
    " user@example.com",
])
def test_email_rejects_malformed_addresses(email):
    violations = check_requirements(APPLICANT_RECORD, _valid_applicant(email=email))
    assert _rules_by_field(violations) == [("email", RuleName.EMAIL)]


# ─── min / max boundaries ────────────────────────────────────────

def test_text_length_at_bounds_passes():
    for password in ("x" * 8, "x" * 20):
        assert check_requirements(
            APPLICANT_RECORD, _valid_applicant(password=password),
        ) == []


def test_text_length_one_below_min_fails():
    violations = check_requirements(
        APPLICANT_RECORD, _valid_applicant(password="1234567"),
    )
    assert _rules_by_field(violations) == [("password", RuleName.MIN)]


def test_text_length_one_above_max_fails():
    violations = check_requirements(
        APPLICANT_RECORD, _valid_applicant(password="x" * 21),
    )
    assert _rules_by_field(violations) == [("password", RuleName.MAX)]


def test_text_length_counts_characters_not_bytes():
    # 20 characters, more than 20 bytes in UTF-8
    password = "contraseñaññññññññññ"
    assert len(password) == 20
    assert check_requirements(
        APPLICANT_RECORD, _valid_applicant(password=password),
    ) == []


def test_integer_at_bounds_passes():
    for age in (18, 60):
        assert check_requirements(APPLICANT_RECORD, _valid_applicant(age=age)) == []


def test_integer_one_unit_outside_bounds_fails():
    below = check_requirements(APPLICANT_RECORD, _valid_applicant(age=17))
    above = check_requirements(APPLICANT_RECORD, _valid_applicant(age=61))
    assert _rules_by_field(below) == [("age", RuleName.MIN)]
    assert _rules_by_field(above) == [("age", RuleName.MAX)]


def test_float_compares_value_against_integer_bound():
    assert check_requirements(APPLICANT_RECORD, _valid_applicant(money=100.0)) == []
    violations = check_requirements(APPLICANT_RECORD, _valid_applicant(money=99.99))
    assert _rules_by_field(violations) == [("money", RuleName.MIN)]


def test_bound_messages_do_not_echo_the_value():
    violations = check_requirements(
        APPLICANT_RECORD, _valid_applicant(password="secret1"),
    )
    assert "secret1" not in violations[0].message
    assert "(8)" in violations[0].message


# ─── Accumulation ────────────────────────────────────────────────

def test_empty_required_text_also_reports_min():
    violations = check_requirements(
        APPLICANT_RECORD, _valid_applicant(password=""),
    )
    assert _rules_by_field(violations) == [
        ("password", RuleName.REQUIRED),
        ("password", RuleName.MIN),
    ]


def test_zero_age_reports_required_and_min():
    violations = check_requirements(APPLICANT_RECORD, _valid_applicant(age=0))
    assert _rules_by_field(violations) == [
        ("age", RuleName.REQUIRED),
        ("age", RuleName.MIN),
    ]


def test_violations_accumulate_across_fields_in_declaration_order():
    violations = check_requirements(APPLICANT_RECORD, _valid_applicant(
        username=" ", password="123456", age=13, money=50,
    ))
    assert _rules_by_field(violations) == [
        ("username", RuleName.REQUIRED),
        ("password", RuleName.MIN),
        ("age", RuleName.MIN),
        ("money", RuleName.MIN),
    ]


def test_empty_record_reports_every_required_field():
    violations = check_requirements(APPLICANT_RECORD, _Applicant())
    required = [f for f, r in _rules_by_field(violations) if r == RuleName.REQUIRED]
    assert required == [
        "username", "email", "password", "age", "money", "is_verified",
    ]


def test_verify_requirements_raises_with_all_violations():
    with pytest.raises(RequirementsError) as exc_info:
        verify_requirements(APPLICANT_RECORD, _valid_applicant(
            password="contraseñahypermegalarga", age=75, money=2500.2,
        ))
    error = exc_info.value
    assert error.http_status == 400
    assert error.record == "Applicant"
    assert [v.field for v in error.violations] == ["password", "age", "money"]
    assert error.message == "; ".join(v.message for v in error.violations)


def test_requirements_error_response_lists_details():
    with pytest.raises(RequirementsError) as exc_info:
        verify_requirements(APPLICANT_RECORD, _valid_applicant(email="user@"))
    body = exc_info.value.to_response()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"] == [
        {"field": "email", "rule": "email", "message": "'email' is not a valid email"},
    ]
