"""Domain models for announcement rich text."""

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class TextSegment:
    """Literal text."""

    text: str
    type: Literal["text"] = field(default="text", init=False)


@dataclass(frozen=True)
class LinkSegment:
    """Validated link with its visible label."""

    text: str
    url: str
    is_internal: bool
    type: Literal["link"] = field(default="link", init=False)


Segment = TextSegment | LinkSegment


@dataclass(frozen=True)
class ParseMeta:
    """Flags describing what the parser rejected or cut off."""

    has_malformed_link_syntax: bool = False
    has_invalid_link_target: bool = False
    processed_link_count: int = 0
    max_links_reached: bool = False


@dataclass(frozen=True)
class ParseResult:
    """Parsed announcement body."""

    segments: list[Segment]
    meta: ParseMeta


@dataclass(frozen=True)
class LinkTarget:
    """Accepted link target."""

    url: str
    is_internal: bool


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an announcement body."""

    valid: bool
    error_key: str | None = None
