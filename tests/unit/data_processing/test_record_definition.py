"""Tests for RecordField / RecordDefinition."""

from dataclasses import dataclass, field

import pytest

from vecstore.backends.vectorstores.record_definition import (
    RecordDefinition,
    RecordField,
    resolve_record_definition,
)
from vecstore.utils.errors import ValidationError


@dataclass
class Doc:
    id: str
    text: str = ""
    embedding: list = field(default_factory=list, metadata={"dimensions": 4})


@dataclass
class Marked:
    doc_key: str = field(metadata={"key": True})
    id: str = ""


@dataclass
class NoKey:
    text: str


@dataclass
class TwoKeys:
    tenant: str = field(metadata={"key": True})
    doc_key: str = field(default="", metadata={"key": True})


class TestRecordField:
    def test_invalid_kind_raises(self):
        with pytest.raises(ValidationError, match="Invalid field kind"):
            RecordField("x", "blob")

    def test_vector_requires_dimensions(self):
        with pytest.raises(ValidationError, match="positive integer dimensions"):
            RecordField("embedding", "vector")

    def test_empty_name_raises(self):
        with pytest.raises(ValidationError):
            RecordField("")


class TestRecordDefinition:
    def test_requires_exactly_one_key(self):
        with pytest.raises(ValidationError, match="exactly one key field"):
            RecordDefinition((RecordField("a"), RecordField("b")))
        with pytest.raises(ValidationError, match="exactly one key field"):
            RecordDefinition((RecordField("a", "key"), RecordField("b", "key")))

    def test_duplicate_names_raise(self):
        with pytest.raises(ValidationError, match="duplicate"):
            RecordDefinition((RecordField("a", "key"), RecordField("a")))

    def test_fields_list_is_frozen_to_tuple(self):
        definition = RecordDefinition([RecordField("id", "key")])
        assert isinstance(definition.fields, tuple)

    def test_from_dataclass(self):
        definition = RecordDefinition.from_record_type(Doc)
        assert definition.key_field.name == "id"
        assert [f.name for f in definition.data_fields] == ["text"]
        assert definition.vector_fields == [RecordField("embedding", "vector", 4)]

    def test_explicit_key_marker_wins_over_id(self):
        definition = RecordDefinition.from_record_type(Marked)
        assert definition.key_field.name == "doc_key"
        assert [f.name for f in definition.data_fields] == ["id"]

    def test_several_key_markers_raise(self):
        with pytest.raises(ValidationError, match="exactly one is allowed"):
            RecordDefinition.from_record_type(TwoKeys)

    def test_dataclass_without_key_raises(self):
        with pytest.raises(ValidationError, match="no key field"):
            RecordDefinition.from_record_type(NoKey)

    def test_non_dataclass_raises(self):
        with pytest.raises(ValidationError, match="not a dataclass"):
            RecordDefinition.from_record_type(dict)

    def test_resolve_prefers_explicit_definition(self):
        explicit = RecordDefinition((RecordField("pk", "key"),))
        assert resolve_record_definition(Doc, explicit) is explicit
        assert resolve_record_definition(Doc, None).key_field.name == "id"
