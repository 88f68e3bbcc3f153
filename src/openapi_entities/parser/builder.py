"""Build normalized Tables from named schemas and path operations."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from openapi_entities.errors import BuildError
from openapi_entities.parser.base import ColumnDef, SchemaRef, Table, TypeDef
from openapi_entities.parser.loader import OpenApiDocument, is_extension
from openapi_entities.resolver import resolve_type

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def _default_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def build_schema_table(name: str, schema: SchemaRef, document: OpenApiDocument) -> Table:
    """Build a 'schema' Table with one column per property, in document order."""
    value = schema.value
    required = set(value.get("required") or [])

    columns = []
    for prop_name, prop_node in (value.get("properties") or {}).items():
        prop = document.resolve(prop_node, schema.source)
        columns.append(
            ColumnDef.create(
                raw_key=str(prop_name),
                type_=resolve_type(prop, document),
                not_null=prop_name in required,
                default=_default_text(prop.value.get("default")),
                comment=prop.value.get("description") or "",
            )
        )

    logger.debug("Built schema %s with %d columns", name, len(columns))
    return Table.create(
        raw_name=name,
        kind="schema",
        columns=columns,
        comment=value.get("description") or "",
    )


def _merge_parameters(
    path_parameters: list[Any],
    operation_parameters: list[Any],
    document: OpenApiDocument,
    source: Path | None,
) -> list[SchemaRef]:
    """Path-level parameters first; an operation parameter with the same (name, in) replaces one."""
    merged: dict[tuple[str, str], SchemaRef] = {}
    for node in [*path_parameters, *operation_parameters]:
        param = document.resolve(node, source)
        if "name" not in param.value:
            raise BuildError(f"Parameter without name: {param.ref or param.value}")
        merged[(param.value["name"], param.value.get("in", ""))] = param
    return list(merged.values())


def _json_content(content: dict[str, Any]) -> dict[str, Any] | None:
    if JSON_MEDIA_TYPE in content:
        return content[JSON_MEDIA_TYPE]
    for media_type, media in content.items():
        if media_type.split(";")[0].strip().lower() == JSON_MEDIA_TYPE:
            return media
    return None


def _parameter_column(param: SchemaRef, document: OpenApiDocument) -> ColumnDef:
    value = param.value
    schema_node = value.get("schema")
    if schema_node is None:
        media = _json_content(value.get("content") or {})
        schema_node = (media or {}).get("schema")
    if schema_node is None:
        raise BuildError(f"Parameter {value['name']!r} has no schema")

    schema = document.resolve(schema_node, param.source)
    return ColumnDef.create(
        raw_key=str(value["name"]),
        type_=resolve_type(schema, document),
        not_null=bool(value.get("required", False)),
        default=_default_text(schema.value.get("default")),
        comment=value.get("description") or "",
        location=value.get("in") or "",
    )


def _response_types(
    responses: dict[str, Any],
    document: OpenApiDocument,
    source: Path | None,
) -> dict[str, TypeDef]:
    """One TypeDef per status code with a JSON body; other codes are skipped."""
    result = {}
    for code in sorted(responses, key=str):
        if is_extension(code):
            continue
        response = document.resolve(responses[code], source)
        media = _json_content(response.value.get("content") or {})
        if media is None or media.get("schema") is None:
            continue
        schema = document.resolve(media["schema"], response.source)
        result[str(code)] = TypeDef.create(
            resolve_type(schema, document),
            comment=response.value.get("description") or "",
        )
    return result


def build_operation_table(
    path: str,
    verb: str,
    operation: dict[str, Any],
    path_parameters: list[Any],
    document: OpenApiDocument,
    source: Path | None = None,
) -> Table:
    """Build a 'path' Table named after the operation's operationId."""
    operation_id = operation.get("operationId")
    if not operation_id or not str(operation_id).strip():
        raise BuildError(f"{verb.upper()} {path} has no operationId")

    params = _merge_parameters(path_parameters, operation.get("parameters") or [], document, source)
    columns = [_parameter_column(p, document) for p in params]
    responses = _response_types(operation.get("responses") or {}, document, source)

    logger.debug("Built operation %s (%s %s) with %d parameters and %d responses",
                 operation_id, verb.upper(), path, len(columns), len(responses))
    return Table.create(
        raw_name=str(operation_id),
        kind="path",
        columns=columns,
        responses=responses,
        comment=operation.get("summary") or operation.get("description") or "",
        path=path,
        verb=verb,
    )
