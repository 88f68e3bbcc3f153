"""Sort entities, wrap them in the output envelope and write it out."""

from __future__ import annotations

import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any

from openapi_entities.errors import EmitError
from openapi_entities.parser.base import DocumentMeta, Table

logger = logging.getLogger(__name__)

STDOUT = "-"
FILE_KIND = "openapi"
SRC_KIND = "openapi"


def sort_tables(tables: list[Table]) -> list[Table]:
    """Stable ascending sort by key; the only ordering guarantee of the output."""
    return sorted(tables, key=lambda t: t.key)


def build_envelope(tables: list[Table], meta: DocumentMeta) -> dict[str, Any]:
    return {
        "kind": FILE_KIND,
        "srcKind": SRC_KIND,
        "data": [t.dump() for t in sort_tables(tables)],
        "meta": meta.dump(),
    }


def render_envelope(envelope: dict[str, Any]) -> str:
    """Serialize the envelope as tab-indented JSON."""
    return json.dumps(envelope, indent="\t", ensure_ascii=False)


def write_output(text: str, destination: Path | str) -> None:
    """Write to stdout for '-', otherwise atomically replace the destination file.

    A failed write leaves no partial file behind.
    """
    if str(destination) == STDOUT:
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    destination = Path(destination)
    tmp_name = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        # mkstemp creates 0600; give the output the usual umask-derived mode
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_name, 0o666 & ~umask)
        os.replace(tmp_name, destination)
    except (OSError, UnicodeError) as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise EmitError(f"Cannot write {destination}: {e}") from e
    logger.info("Wrote %d bytes to %s", len(text.encode("utf-8")), destination)
