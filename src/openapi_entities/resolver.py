"""Resolve property, parameter and response schemas to a canonical Type.

Resolution order:
  1. arrays take their base from the item schema (format, then $ref name, then type)
  2. a $ref takes the referenced schema's bare name
  3. anything else takes its declared type
then PRIMITIVE_TYPES translates primitive names. Unknown names pass through.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Any, Mapping

from openapi_entities.errors import ResolutionError
from openapi_entities.parser.base import SchemaRef, Type
from openapi_entities.parser.loader import OpenApiDocument

PRIMITIVE_TYPES: Mapping[str, str] = MappingProxyType({
    "double": "float64",
    "integer": "int64",
    "number": "int64",
    "boolean": "bool",
})

_COMPOSITE_KEYS = ("properties", "additionalProperties", "allOf", "oneOf", "anyOf")


def ref_name(ref: str) -> str:
    """Return the trailing segment of a $ref, e.g. '#/components/schemas/Pet' -> 'Pet'."""
    name = ref.split("/")[-1]
    if not name or name.startswith("#"):
        raise ResolutionError(f"Reference {ref!r} has no trailing name segment")
    if "#" not in ref:
        # whole-file reference, e.g. 'pet.yaml'
        name = PurePosixPath(name).stem
    return name


def declared_type(schema: dict[str, Any]) -> str:
    """Return the schema's declared type name, or '' when it has none."""
    type_ = schema.get("type")
    if isinstance(type_, list):
        # OpenAPI 3.1 nullable form: ["string", "null"]
        type_ = next((t for t in type_ if t != "null"), "")
    if not type_ and any(k in schema for k in _COMPOSITE_KEYS):
        return "object"
    return type_ or ""


def _item_base(item: SchemaRef) -> str:
    item_type = declared_type(item.value)
    if item.value.get("format"):
        return item.value["format"]
    if item.ref and item_type in ("object", ""):
        return ref_name(item.ref)
    return item_type


def resolve_type(
    node: SchemaRef,
    document: OpenApiDocument,
    primitives: Mapping[str, str] = PRIMITIVE_TYPES,
) -> Type:
    """Resolve a schema node to its canonical Type."""
    schema = node.value
    is_array = declared_type(schema) == "array"
    item_format = ""
    length = schema.get("maxLength") or 0

    if is_array:
        if "items" not in schema:
            raise ResolutionError(f"Array schema without items: {node.ref or schema}")
        item = document.resolve(schema["items"], node.source)
        base = _item_base(item)
        item_format = item.value.get("format", "")
        length = length or item.value.get("maxLength") or 0
    elif node.ref:
        base = ref_name(node.ref)
    else:
        base = declared_type(schema)

    base = primitives.get(base, base)
    return Type(
        base=base,
        array=is_array,
        format=item_format or schema.get("format", ""),
        length=length,
    )
