"""In-memory handle for the document chosen by the user."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True, slots=True)
class SelectedFile:
    """Binary document awaiting analysis."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lower().lstrip(".")

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def media_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or "application/octet-stream"


__all__ = ["SelectedFile"]
