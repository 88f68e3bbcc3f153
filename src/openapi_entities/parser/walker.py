"""Walk a loaded OpenAPI document and build every entity it describes."""

from __future__ import annotations

import logging
from collections import Counter

from openapi_entities.parser.base import DocumentInfo, DocumentMeta, Table
from openapi_entities.parser.builder import build_operation_table, build_schema_table
from openapi_entities.parser.loader import OpenApiDocument, is_extension, scalar_text

logger = logging.getLogger(__name__)

VERBS = ("get", "post", "delete", "patch", "put")


def document_meta(document: OpenApiDocument) -> DocumentMeta:
    """Collect title, description, version and server URLs."""
    data = document.data
    info = None
    if data.get("info") is not None:
        raw = data["info"]
        info = DocumentInfo(
            title=scalar_text(raw.get("title")),
            description=scalar_text(raw.get("description")),
            version=scalar_text(raw.get("version")),
        )
    servers = None
    if data.get("servers") is not None:
        servers = [s.get("url", "") for s in data["servers"]]
    return DocumentMeta(info=info, servers=servers)


def walk_document(document: OpenApiDocument) -> tuple[list[Table], DocumentMeta]:
    """Build one Table per named schema and one per declared path operation.

    The returned list follows document order; callers sort it for output.
    """
    tables: list[Table] = []

    for name, node in document.schemas.items():
        schema = document.resolve(node)
        tables.append(build_schema_table(str(name), schema, document))

    for path, node in document.paths.items():
        if is_extension(path):
            continue
        path_item = document.resolve(node)
        shared = path_item.value.get("parameters") or []
        for verb in VERBS:
            operation = path_item.value.get(verb)
            if operation is None:
                continue
            tables.append(
                build_operation_table(path, verb, operation, shared, document, path_item.source)
            )

    for key, count in Counter(t.key for t in tables).items():
        if count > 1:
            logger.warning("%d entities share the key %r", count, key)

    logger.info("Built %d entities", len(tables))
    return tables, document_meta(document)
