"""Mapping between response MIME types and template file extensions."""

from __future__ import annotations

from typing import Iterator, Mapping, Optional

_DEFAULT_FORMATS = {
    "application/json": "json",
    "application/xml": "xml",
    "text/html": "html",
    "text/plain": "txt",
}


class MimeTypeFormats:
    """Relates MIME types to the file extensions of their templates.

    Without an explicit mapping it starts from the four built-in pairs
    for JSON, XML, HTML and plain text.
    """

    def __init__(self, formats: Optional[Mapping[str, str]] = None) -> None:
        source = _DEFAULT_FORMATS if formats is None else formats
        self._formats: dict[str, str] = dict(source)

    def get(self, mime_type: str) -> str:
        """Return the extension for ``mime_type``, or ``""`` if it is unknown."""
        return self._formats.get(mime_type, "")

    def set(self, mime_type: str, fmt: str) -> None:
        """Relate ``mime_type`` to the extension ``fmt``, replacing any earlier one."""
        self._formats[mime_type] = fmt

    def delete(self, mime_type: str) -> None:
        """Forget ``mime_type``; unknown types are ignored."""
        self._formats.pop(mime_type, None)

    def __getitem__(self, mime_type: str) -> str:
        return self._formats[mime_type]

    def __contains__(self, mime_type: object) -> bool:
        return mime_type in self._formats

    def __iter__(self) -> Iterator[str]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._formats!r})"


MIME_TYPE_FORMATS = MimeTypeFormats()