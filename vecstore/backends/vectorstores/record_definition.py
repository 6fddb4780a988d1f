"""Field definitions describing the shape of a collection's records."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

from vecstore.utils.errors import ValidationError

FIELD_KINDS = ("key", "data", "vector")


@dataclass(frozen=True)
class RecordField:
    """One field of a record."""

    name: str
    kind: str = "data"
    dimensions: Optional[int] = None

    def __post_init__(self):
        if not self.name:
            raise ValidationError("field name must be non-empty")
        if self.kind not in FIELD_KINDS:
            raise ValidationError(
                f"Invalid field kind {self.kind!r} for {self.name!r}; "
                f"expected one of {', '.join(FIELD_KINDS)}"
            )
        if self.kind == "vector":
            if not isinstance(self.dimensions, int) or self.dimensions < 1:
                raise ValidationError(
                    f"Vector field {self.name!r} needs positive integer dimensions, "
                    f"got {self.dimensions!r}"
                )


@dataclass(frozen=True)
class RecordDefinition:
    """Ordered set of fields with exactly one key field."""

    fields: tuple[RecordField, ...]

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        keys = [f for f in self.fields if f.kind == "key"]
        if len(keys) != 1:
            raise ValidationError(
                f"Record definition must have exactly one key field, found {len(keys)}"
            )
        names = [f.name for f in self.fields]
        if len(names) != len(set(names)):
            raise ValidationError("Record definition has duplicate field names")

    @property
    def key_field(self) -> RecordField:
        return next(f for f in self.fields if f.kind == "key")

    @property
    def data_fields(self) -> list[RecordField]:
        return [f for f in self.fields if f.kind == "data"]

    @property
    def vector_fields(self) -> list[RecordField]:
        return [f for f in self.fields if f.kind == "vector"]

    @classmethod
    def from_record_type(cls, record_type: Any) -> RecordDefinition:
        """Infer a definition from a dataclass.

        A field with ``metadata={"key": True}`` is the key (falling back to a
        field named ``id``); ``metadata={"dimensions": n}`` marks a vector.

        Raises:
            ValidationError: If the type is not a dataclass, has no key or
                marks more than one
        """
        if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
            raise ValidationError(
                f"Cannot infer record definition from {record_type!r}: not a dataclass type"
            )

        type_fields = dataclasses.fields(record_type)
        marked = [f.name for f in type_fields if f.metadata.get("key")]
        if len(marked) > 1:
            raise ValidationError(
                f"{record_type.__name__} marks {len(marked)} key fields "
                f"({', '.join(marked)}); exactly one is allowed"
            )
        if marked:
            key_name = marked[0]
        elif any(f.name == "id" for f in type_fields):
            key_name = "id"
        else:
            raise ValidationError(
                f"{record_type.__name__} has no key field; mark one with metadata={{'key': True}}"
            )

        fields = []
        for f in type_fields:
            if f.name == key_name:
                fields.append(RecordField(f.name, "key"))
            elif "dimensions" in f.metadata:
                fields.append(RecordField(f.name, "vector", f.metadata["dimensions"]))
            else:
                fields.append(RecordField(f.name, "data"))
        return cls(tuple(fields))


def resolve_record_definition(
    record_type: Any, record_definition: Optional[RecordDefinition]
) -> RecordDefinition:
    """Explicit definition wins; otherwise infer from the record type."""
    if record_definition is not None:
        return record_definition
    return RecordDefinition.from_record_type(record_type)
