"""Domain Types - verifies identity wrappers and closed vocabularies."""

from uuid import uuid4

from tasktracker.core.domain_types import (
    AccessStage, FieldType, RuleName, TaskId, UserId,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert TaskId(uid) == uid


def test_rule_vocabulary_is_closed_to_four_rules():
    assert {r.value for r in RuleName} == {"required", "email", "min", "max"}


def test_numeric_field_types():
    assert FieldType.INTEGER.is_numeric
    assert FieldType.FLOAT.is_numeric
    assert not FieldType.TEXT.is_numeric
    assert not FieldType.BOOLEAN.is_numeric


def test_access_stages_cover_request_lifecycle():
    assert [s.value for s in AccessStage] == [
        "unauthenticated",
        "credential_verified",
        "resource_located",
        "ownership_confirmed",
        "authorized",
        "rejected",
    ]
