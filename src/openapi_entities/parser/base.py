"""Normalized data models produced from an OpenAPI document.

The builders turn schemas and operations into these models; the emitter
serializes them. Field serialization aliases are the wire format read by the
downstream generators.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from openapi_entities import naming


class SchemaRef(BaseModel):
    """A schema node after $ref resolution, remembering the first ref it came through."""

    model_config = ConfigDict(frozen=True)

    ref: str = ""
    value: dict[str, Any] = {}
    source: Path | None = None  # file the resolved value lives in


class Type(BaseModel):
    """Canonical type of a field: a primitive name or a referenced entity name."""

    model_config = ConfigDict(frozen=True)

    base: str
    array: bool = False
    format: str = ""
    length: int = 0


def wrap_optional(base: str, not_null: bool) -> str:
    """First stage: mark the element type optional."""
    return base if not_null else "*" + base


def wrap_array(element: str, array: bool) -> str:
    """Second stage: wrap the (possibly optional) element in an array."""
    return "[]" + element if array else element


class TypeDef(BaseModel):
    """An unnamed type, used for response bodies."""

    go_type: str = Field(serialization_alias="Type")
    base_type: str = Field(serialization_alias="baseType")
    format: str = ""
    size: int = 0
    type: Type = Field(exclude=True)
    is_array: bool = Field(serialization_alias="isArray")
    not_null: bool = Field(serialization_alias="notNull")
    comment: str = ""

    @classmethod
    def create(cls, type_: Type, comment: str = "") -> TypeDef:
        # Response bodies are never optional, whatever the schema says
        element = wrap_optional(type_.base, True)
        return cls(
            go_type=wrap_array(element, type_.array),
            base_type=element,
            format=type_.format,
            size=type_.length,
            type=type_,
            is_array=type_.array,
            not_null=True,
            comment=comment,
        )


class ColumnDef(BaseModel):
    """A schema property or an operation parameter."""

    db_plural_name: str = Field(serialization_alias="namesDb")
    db_name: str = Field(serialization_alias="nameDb")
    json_name: str = Field(serialization_alias="nameJson")
    name: str = Field(serialization_alias="Name")
    var_name: str = Field(serialization_alias="name")
    plural_name: str = Field(serialization_alias="Names")
    plural_var_name: str = Field(serialization_alias="names")
    raw_key: str = Field(serialization_alias="nameExact")
    go_type: str = Field(serialization_alias="Type")
    base_type: str = Field(serialization_alias="baseType")
    format: str = ""
    size: int = 0
    type: Type = Field(exclude=True)
    is_array: bool = Field(serialization_alias="isArray")
    not_null: bool = Field(serialization_alias="notNull")
    default: str | None = None
    comment: str = ""
    location: str = Field("", serialization_alias="in")  # query / path / header / cookie
    key: str

    @classmethod
    def create(
        cls,
        raw_key: str,
        type_: Type,
        not_null: bool,
        default: str | None = None,
        comment: str = "",
        location: str = "",
    ) -> ColumnDef:
        name = naming.pascal_identifier(raw_key)
        plural_name = naming.plural_identifier(name)
        json_name = naming.json_key(raw_key)
        element = wrap_optional(type_.base, not_null)
        return cls(
            db_plural_name=naming.plural_form(raw_key),
            db_name=naming.snake_singular(name),
            json_name=json_name,
            name=name,
            var_name=naming.lower_camel(name),
            plural_name=plural_name,
            plural_var_name=naming.lower_camel(plural_name),
            raw_key=raw_key,
            go_type=wrap_array(element, type_.array),
            base_type=element,
            format=type_.format,
            size=type_.length,
            type=type_,
            is_array=type_.array,
            not_null=not_null,
            default=default,
            comment=comment,
            location=location,
            key=json_name,
        )


class Table(BaseModel):
    """One output entity: a named schema (kind 'schema') or an operation (kind 'path')."""

    db_plural_name: str = Field(serialization_alias="namesDb")
    db_name: str = Field(serialization_alias="nameDb")
    name: str = Field(serialization_alias="Name")
    var_name: str = Field(serialization_alias="name")
    plural_name: str = Field(serialization_alias="Names")
    plural_var_name: str = Field(serialization_alias="names")
    short_name: str = Field(serialization_alias="n")
    path: str = ""
    verb: str = ""
    comment: str = ""
    key: str
    columns: list[ColumnDef] = Field(serialization_alias="fields")
    responses: dict[str, TypeDef] = {}
    kind: str  # schema / path

    @classmethod
    def create(
        cls,
        raw_name: str,
        kind: str,
        columns: list[ColumnDef],
        responses: dict[str, TypeDef] | None = None,
        comment: str = "",
        path: str = "",
        verb: str = "",
    ) -> Table:
        name = naming.pascal_identifier(raw_name)
        db_name = naming.snake_singular(name)
        plural_name = naming.plural_identifier(name)
        return cls(
            db_plural_name=naming.plural_form(db_name),
            db_name=db_name,
            name=name,
            var_name=naming.lower_camel(name),
            plural_name=plural_name,
            plural_var_name=naming.lower_camel(plural_name),
            short_name=naming.short_alias(name),
            path=path,
            verb=verb,
            comment=comment,
            key=name,
            columns=columns,
            responses=responses or {},
            kind=kind,
        )

    def dump(self) -> dict[str, Any]:
        """Serialize to the wire format, omitting empty optional fields."""
        return self.model_dump(by_alias=True, exclude_defaults=True)


class DocumentInfo(BaseModel):
    title: str = ""
    description: str = ""
    version: str = ""


class DocumentMeta(BaseModel):
    """Document-level metadata carried through to the envelope unchanged."""

    model_config = ConfigDict(frozen=True)

    info: DocumentInfo | None = None
    servers: list[str] | None = None

    def dump(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
