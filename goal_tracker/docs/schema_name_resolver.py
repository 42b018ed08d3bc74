"""Component naming for marshmallow schemas in the generated OpenAPI document.

``GoalSchema`` becomes ``Goal`` (or its ``Meta.name``), and instances built
with modifiers get a readable variant label, e.g.
``GoalSchema(only=("id", "name"))`` -> ``GoalOnlyIdName`` and
``GoalSchema(partial=True)`` -> ``GoalPartial``.
"""

from __future__ import annotations

from typing import Any

from marshmallow import Schema

_SCHEMA_SUFFIX = "Schema"
_VARIANT_LABELS = (
    ("only", "Only"),
    ("exclude", "Without"),
    ("load_only", "LoadOnly"),
    ("dump_only", "DumpOnly"),
    ("partial", "Partial"),
)


def _camel_case(field_name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in field_name.split("_"))


def _base_name(schema_cls: type[Any]) -> str:
    declared = getattr(getattr(schema_cls, "Meta", None), "name", None)
    if isinstance(declared, str) and declared.strip():
        return declared.strip()
    name = schema_cls.__name__
    if name.endswith(_SCHEMA_SUFFIX) and name != _SCHEMA_SUFFIX:
        return name[: -len(_SCHEMA_SUFFIX)]
    return name


def _variant_label(schema: Any) -> str:
    if not isinstance(schema, Schema):
        return ""
    label = ""
    for attribute, prefix in _VARIANT_LABELS:
        value = getattr(schema, attribute, None)
        if not value:
            continue
        if value is True:
            label += prefix
        else:
            label += prefix + "".join(_camel_case(str(name)) for name in sorted(value))
    return label


def resolve_openapi_schema_name(schema: type[Schema] | Schema | Any) -> str:
    schema_cls = schema if isinstance(schema, type) else type(schema)
    return _base_name(schema_cls) + _variant_label(schema)
