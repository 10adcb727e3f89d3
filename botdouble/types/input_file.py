"""Files uploaded to the Bot API."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path


@dataclass
class InputFile:
    """A file sent as a multipart/form-data part.

    Example:
        >>> bot.send_document(InputFile(b"%PDF...", "report.pdf"))
    """

    content: bytes
    filename: str
    content_type: str | None = None

    def __post_init__(self) -> None:
        if self.content_type is None:
            guessed, _ = mimetypes.guess_type(self.filename)
            self.content_type = guessed or "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path) -> InputFile:
        path = Path(path)
        return cls(content=path.read_bytes(), filename=path.name)

    def as_httpx_file(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type or "application/octet-stream")
