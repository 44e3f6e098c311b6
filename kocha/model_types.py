"""Field types available to generated models and their column options."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelFieldType:
    """The type name of a model field and the extra tags it carries."""

    name: str
    option_tags: tuple[str, ...] = ()


def genmai_field_type_map() -> dict[str, ModelFieldType]:
    """Return the field types of the genmai ORM keyed by the name users give."""
    return {
        "int": ModelFieldType("int"),
        "integer": ModelFieldType("int"),
        "int8": ModelFieldType("int8"),
        "byte": ModelFieldType("int8"),
        "int16": ModelFieldType("int16"),
        "smallint": ModelFieldType("int16"),
        "int32": ModelFieldType("int32"),
        "int64": ModelFieldType("int64"),
        "bigint": ModelFieldType("int64"),
        "string": ModelFieldType("string"),
        "text": ModelFieldType("string", ('size:"65533"',)),
        "mediumtext": ModelFieldType("string", ('size:"16777216"',)),
        "longtext": ModelFieldType("string", ('size:"4294967295"',)),
        "bytea": ModelFieldType("[]byte"),
        "blob": ModelFieldType("[]byte"),
        "mediumblob": ModelFieldType("[]byte", ('size:"65533"',)),
        "longblob": ModelFieldType("[]byte", ('size:"4294967295"',)),
        "bool": ModelFieldType("bool"),
        "boolean": ModelFieldType("bool"),
        "float": ModelFieldType("genmai.Float64"),
        "float64": ModelFieldType("genmai.Float64"),
        "double": ModelFieldType("genmai.Float64"),
        "real": ModelFieldType("genmai.Float64"),
        "date": ModelFieldType("time.Time"),
        "time": ModelFieldType("time.Time"),
        "datetime": ModelFieldType("time.Time"),
        "timestamp": ModelFieldType("time.Time"),
        "decimal": ModelFieldType("genmai.Rat"),
        "numeric": ModelFieldType("genmai.Rat"),
    }


def lookup_field_type(name: str) -> ModelFieldType:
    """Return the field type for ``name``; raise ValueError if unsupported."""
    try:
        return genmai_field_type_map()[name]
    except KeyError:
        raise ValueError(f"unsupported field type: `{name}'") from None