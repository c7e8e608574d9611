"""
src/nodeflow/export/files.py

Generated-file plumbing for terminal `output` nodes.

- File names: `<node name with whitespace as underscores>_<epoch ms>.<ext>`
- Descriptor urls are `data:` URIs carrying the full content
- Delivery (auto-save vs. offer for viewing) is delegated to an ArtifactSink;
  the default sink does nothing, the directory sink saves downloads to disk
"""

from __future__ import annotations

import base64
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from nodeflow.core.graph.settings import OutputAction
from nodeflow.core.pipeline.types import GeneratedFile

_WHITESPACE = re.compile(r"\s+")


def file_name(node_name: str, moment: datetime, extension: str) -> str:
    stamp = int(moment.timestamp() * 1000)
    return f"{_WHITESPACE.sub('_', node_name)}_{stamp}.{extension}"


def data_uri(content: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Inverse of `data_uri`: returns `(mime_type, content)`."""
    if not uri.startswith("data:") or ";base64," not in uri:
        raise ValueError("Not a base64 data URI")
    header, payload = uri[len("data:"):].split(";base64,", 1)
    return header, base64.b64decode(payload)


@runtime_checkable
class ArtifactSink(Protocol):
    def deliver(self, file_name: str, content: bytes, mime_type: str, action: OutputAction) -> None:
        ...


class NullArtifactSink:
    """Leaves delivery to whoever consumes the generated-file descriptors."""

    def deliver(self, file_name: str, content: bytes, mime_type: str, action: OutputAction) -> None:
        return None


class DirectoryArtifactSink:
    """Saves `download` artifacts into a directory; `open` artifacts are only offered."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        self.saved: List[Path] = []
        self.offered: List[str] = []

    def deliver(self, file_name: str, content: bytes, mime_type: str, action: OutputAction) -> None:
        if action is not OutputAction.DOWNLOAD:
            self.offered.append(file_name)
            return
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / file_name
        path.write_bytes(content)
        self.saved.append(path)


def make_file(
    name: str,
    content: bytes,
    mime_type: str,
    *,
    display_name: Optional[str] = None,
) -> GeneratedFile:
    return GeneratedFile(name=display_name or name, url=data_uri(content, mime_type))


__all__ = [
    "file_name",
    "data_uri",
    "decode_data_uri",
    "ArtifactSink",
    "NullArtifactSink",
    "DirectoryArtifactSink",
    "make_file",
]
