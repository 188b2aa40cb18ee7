"""Requirements Engine - declarative field rules parsed once, evaluated per request.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - A RecordSchema is built once (module import) and never changes afterwards
    - Malformed tags raise SchemaDefinitionError at declaration, never at request time
    - Every rule of every field is evaluated; violations accumulate in declaration order
    - Violation messages name the field and the bound, never the submitted value

Design Decisions:
    - Closed rule set as frozen dataclasses + exhaustive match: an unknown rule
      cannot exist past parse_rules()
    - Explicit (field_name, field_type, tag) tables instead of model introspection:
      the schema lives next to the request model it guards
    - None is read as the zero value of the field type, so absent fields behave
      like empty ones
    - Numeric `required` treats 0 as missing (a legitimate 0 cannot pass `required`)
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tasktracker.core.domain_types import FieldType, RuleName
from tasktracker.core.errors import RequirementsError, SchemaDefinitionError


TAG_SEPARATOR = ";"
ARGUMENT_SEPARATOR = "="

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

_INTEGER_ARGUMENT = re.compile(r"[+-]?\d+")


# ─── Rules ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Required:
    name = RuleName.REQUIRED


@dataclass(frozen=True)
class Email:
    name = RuleName.EMAIL


@dataclass(frozen=True)
class Min:
    bound: int
    name = RuleName.MIN


@dataclass(frozen=True)
class Max:
    bound: int
    name = RuleName.MAX


Rule = Required | Email | Min | Max


@dataclass(frozen=True)
class Violation:
    """One failed rule on one field."""
    field: str
    rule: RuleName
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "rule": self.rule.value, "message": self.message}


@dataclass(frozen=True)
class FieldRules:
    name: str
    field_type: FieldType
    rules: tuple[Rule, ...]


@dataclass(frozen=True)
class RecordSchema:
    """Static rule table for one request record type."""
    name: str
    fields: tuple[FieldRules, ...]

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


# ─── Declaration ─────────────────────────────────────────────────

def parse_rules(tag: str, field_type: FieldType) -> tuple[Rule, ...]:
    """Parse a `ruleName[=argument];...` tag into rules for a field of field_type.

    Raises SchemaDefinitionError on any malformed entry.
    """
    if not tag.strip():
        return ()
    return tuple(
        _parse_entry(entry.strip(), field_type)
        for entry in tag.split(TAG_SEPARATOR)
    )


def _parse_entry(entry: str, field_type: FieldType) -> Rule:
    if not entry:
        raise SchemaDefinitionError("empty rule entry in requirements tag")

    raw_name, has_argument, argument = entry.partition(ARGUMENT_SEPARATOR)
    try:
        name = RuleName(raw_name.strip())
    except ValueError:
        raise SchemaDefinitionError(
            f"'{raw_name.strip()}' requirement is not available",
        ) from None

    match name:
        case RuleName.REQUIRED | RuleName.EMAIL:
            if has_argument:
                raise SchemaDefinitionError(
                    f"'{name.value}' requirement takes no value",
                )
            if name is RuleName.EMAIL and field_type is not FieldType.TEXT:
                raise SchemaDefinitionError(
                    f"'email' requirement only applies to text fields, not {field_type.value}",
                )
            return Required() if name is RuleName.REQUIRED else Email()
        case RuleName.MIN | RuleName.MAX:
            if field_type is FieldType.BOOLEAN:
                raise SchemaDefinitionError(
                    f"'{name.value}' requirement does not apply to boolean fields",
                )
            bound = _parse_bound(name, argument.strip())
            return Min(bound) if name is RuleName.MIN else Max(bound)


def _parse_bound(name: RuleName, argument: str) -> int:
    if not argument:
        raise SchemaDefinitionError(f"Requirement '{name.value}' has no value")
    if not _INTEGER_ARGUMENT.fullmatch(argument):
        raise SchemaDefinitionError(
            f"{name.value.capitalize()} requirement cannot be '{argument}', should be an integer",
        )
    return int(argument)


def define_record(
    name: str, *fields: tuple[str, FieldType, str],
) -> RecordSchema:
    """Build a RecordSchema from (field_name, field_type, tag) triples.

    Call at module level so a broken declaration fails at import.
    """
    seen: set[str] = set()
    declared = []
    for field_name, field_type, tag in fields:
        if field_name in seen:
            raise SchemaDefinitionError("field declared twice", name, field_name)
        seen.add(field_name)
        try:
            rules = parse_rules(tag, field_type)
        except SchemaDefinitionError as e:
            raise SchemaDefinitionError(str(e), name, field_name) from e
        declared.append(FieldRules(field_name, field_type, rules))
    return RecordSchema(name, tuple(declared))


# ─── Evaluation ──────────────────────────────────────────────────

def check_requirements(schema: RecordSchema, record: Any) -> list[Violation]:
    """Evaluate every rule of every declared field. Returns all violations."""
    violations = []
    for spec in schema.fields:
        value = _read_field(record, spec.name)
        for rule in spec.rules:
            violation = check_rule(rule, spec, value)
            if violation is not None:
                violations.append(violation)
    return violations


def verify_requirements(schema: RecordSchema, record: Any) -> None:
    """Raise RequirementsError carrying every violation, or return None if valid."""
    violations = check_requirements(schema, record)
    if violations:
        raise RequirementsError(schema.name, violations)


def check_rule(rule: Rule, spec: FieldRules, value: Any) -> Violation | None:
    """Evaluate one rule against one field value."""
    match rule:
        case Required():
            if _is_missing(spec.field_type, value):
                return Violation(
                    spec.name, rule.name, f"'{spec.name}' is required",
                )
        case Email():
            if not EMAIL_PATTERN.fullmatch(value or ""):
                return Violation(
                    spec.name, rule.name, f"'{spec.name}' is not a valid email",
                )
        case Min(bound=bound):
            if _measure(spec.field_type, value) < bound:
                return Violation(
                    spec.name, rule.name, _bound_message(spec, "less than the minimum", bound),
                )
        case Max(bound=bound):
            if _measure(spec.field_type, value) > bound:
                return Violation(
                    spec.name, rule.name, _bound_message(spec, "greater than the maximum", bound),
                )
    return None


def _read_field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _is_missing(field_type: FieldType, value: Any) -> bool:
    match field_type:
        case FieldType.TEXT:
            return not (value or "").strip()
        case FieldType.BOOLEAN:
            return value is not True
        case _ if field_type.is_numeric:
            return (value or 0) == 0


def _measure(field_type: FieldType, value: Any) -> float:
    """Text is measured by character count, numbers by value."""
    if field_type is FieldType.TEXT:
        return len(value or "")
    return value or 0


def _bound_message(spec: FieldRules, relation: str, bound: int) -> str:
    if spec.field_type is FieldType.TEXT:
        return f"'{spec.name}' length is {relation} ({bound})"
    return f"'{spec.name}' is {relation} value ({bound})"
