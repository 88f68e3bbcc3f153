"""Load an OpenAPI 3.x document and resolve its $ref pointers.

Documents are read with PyYAML, falling back to json for JSON that YAML
rejects (e.g. tab-indented). References may be local
("#/components/schemas/Pet") or point into another file relative to the
referring one ("common.yaml#/components/schemas/Error").
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any
from urllib.parse import unquote

import yaml

from openapi_entities.errors import LoadError
from openapi_entities.parser.base import SchemaRef

logger = logging.getLogger(__name__)

_BOOL_TAG = "tag:yaml.org,2002:bool"


class SourceFloat(float):
    """A YAML float that remembers how it was written ('1.10', not 1.1)."""

    text: str


def _construct_float(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> SourceFloat:
    value = SourceFloat(loader.construct_yaml_float(node))
    value.text = node.value
    return value


class OpenApiLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 booleans: 'on', 'off', 'yes', 'no' stay strings."""


OpenApiLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
OpenApiLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
OpenApiLoader.add_constructor("tag:yaml.org,2002:float", _construct_float)


def is_extension(key: Any) -> bool:
    """Specification extensions ('x-...') may appear among paths and responses."""
    return str(key).startswith("x-")


def scalar_text(value: Any) -> str:
    """Text of a scalar as written in the source document."""
    if value is None:
        return ""
    return getattr(value, "text", None) or str(value)


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}") from e
    try:
        return yaml.load(text, Loader=OpenApiLoader)
    except yaml.YAMLError as e:
        # Try JSON specifically (tab-indented JSON is not valid YAML)
        try:
            return json.loads(text)
        except (json.JSONDecodeError, ValueError):
            pass
        raise LoadError(f"Cannot parse {path}: {e}") from e


def _unescape(token: str) -> str:
    return unquote(token).replace("~1", "/").replace("~0", "~")


class OpenApiDocument:
    """A loaded OpenAPI document plus any external files it references."""

    def __init__(self, data: dict[str, Any], path: Path):
        self.data = data
        self.path = path.resolve()
        self._files: dict[Path, Any] = {self.path: data}

    @property
    def schemas(self) -> dict[str, Any]:
        return (self.data.get("components") or {}).get("schemas") or {}

    @property
    def paths(self) -> dict[str, Any]:
        return self.data.get("paths") or {}

    def _file(self, path: Path) -> Any:
        path = path.resolve()
        if path not in self._files:
            logger.debug("Loading external reference %s", path)
            if not path.exists():
                raise LoadError(f"External reference not found: {path}")
            self._files[path] = _read_yaml(path)
        return self._files[path]

    def _target(self, ref: str, source: Path) -> tuple[Any, Path]:
        location, _, pointer = ref.partition("#")
        if location.startswith(("http://", "https://")):
            raise LoadError(f"Remote reference not supported: {ref}")
        target_file = (source.parent / location).resolve() if location else source
        node = self._file(target_file)
        for token in pointer.split("/")[1:]:
            key = _unescape(token)
            try:
                if isinstance(node, list):
                    node = node[int(key)]
                else:
                    node = node[key]
            except (KeyError, IndexError, ValueError, TypeError):
                raise LoadError(f"Unresolved reference {ref!r} in {source}") from None
        return node, target_file

    def resolve(self, node: Any, source: Path | None = None) -> SchemaRef:
        """Follow a node's $ref chain to its value.

        The returned ref is the first one encountered, which names the type.
        """
        source = source or self.path
        first_ref = ""
        seen: set[tuple[Path, str]] = set()
        while isinstance(node, dict) and isinstance(node.get("$ref"), str):
            ref = node["$ref"]
            first_ref = first_ref or ref
            if (source, ref) in seen:
                raise LoadError(f"Cyclic reference {ref!r} in {source}")
            seen.add((source, ref))
            node, source = self._target(ref, source)
        if node is None:
            node = {}
        if not isinstance(node, dict):
            raise LoadError(f"Reference {first_ref!r} does not point to an object")
        return SchemaRef(ref=first_ref, value=node, source=source)

    def check_references(self) -> None:
        """Resolve every $ref reachable from the document, failing on the first broken one."""
        pending = [self.path]
        checked: set[Path] = set()
        count = 0
        while pending:
            path = pending.pop()
            if path in checked:
                continue
            checked.add(path)
            for node in _ref_nodes(self._files[path]):
                target = self.resolve(node, path)
                count += 1
                if target.source not in checked:
                    pending.append(target.source)
        logger.debug("Resolved %d references across %d files", count, len(checked))


def _ref_nodes(node: Any):
    if isinstance(node, dict):
        if isinstance(node.get("$ref"), str):
            yield node
            return
        for value in node.values():
            yield from _ref_nodes(value)
    elif isinstance(node, list):
        for value in node:
            yield from _ref_nodes(value)


def load_document(file_path: Path) -> OpenApiDocument:
    """Load an OpenAPI 3.x document and verify all of its references resolve."""
    logger.info("Loading OpenAPI document from %s", file_path)
    data = _read_yaml(file_path)

    if not isinstance(data, dict) or not ("openapi" in data or "swagger" in data):
        raise LoadError(f"{file_path} is not an OpenAPI document")
    version = str(data.get("openapi", ""))
    if not version.startswith("3"):
        raise LoadError(f"{file_path}: only OpenAPI 3.x documents are supported (found {data.get('swagger') or version!r})")

    document = OpenApiDocument(data, file_path)
    document.check_references()

    info = data.get("info") or {}
    logger.info("Loaded %r version %s", info.get("title", ""), info.get("version", ""))
    logger.debug("Found %d schemas and %d paths", len(document.schemas), len(document.paths))
    return document
