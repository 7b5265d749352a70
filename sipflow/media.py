"""Media descriptions found in the SDP body of SIP messages."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

MEDIATYPELEN = 15

StandardFormats = Union[Callable[[int], Union[str, None]], Mapping[int, str], None]


@dataclass
class MediaFormat:
    """A payload format declared in SDP: its code and its name."""

    id: int
    format: str


@dataclass
class Media:
    """One media description of a message's SDP content."""

    msg: Any = None
    address: Any = None
    type: str = ""
    fmtcode: int = 0
    formats: list[MediaFormat] = field(default_factory=list)

    def set_type(self, media_type: str) -> None:
        """Set the media type, keeping at most MEDIATYPELEN - 1 characters."""
        self.type = media_type[: MEDIATYPELEN - 1]

    def add_format(self, code: int, fmt: str) -> None:
        """Record a format described in the SDP payload."""
        self.formats.append(MediaFormat(code, fmt))

    def get_format(self, code: int) -> str:
        """Return the name of the described format ``code``, or "Unassigned"."""
        for described in self.formats:
            if described.id == code:
                return described.format
        return "Unassigned"

    def preferred_format(self, standard: StandardFormats = None) -> str:
        """Return the name of the preferred format.

        ``standard`` gives the names of standard payload formats (a mapping
        or a function returning None for unknown codes); those win over the
        formats described in the SDP payload.
        """
        name = None
        if callable(standard):
            name = standard(self.fmtcode)
        elif standard is not None:
            name = standard.get(self.fmtcode)
        if name:
            return name
        return self.get_format(self.fmtcode)