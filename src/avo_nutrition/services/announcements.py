"""Announcement rich text: `[label](target)` links inside plain text.

The parser never raises. Malformed or unsafe links fall back to literal text
and set a flag in the parse meta; `validate_announcement_body` turns those
flags into a single error key for the admin form.
"""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum

from pydantic import AnyUrl, TypeAdapter, ValidationError

from avo_nutrition.domain.announcements import (
    LinkSegment,
    LinkTarget,
    ParseMeta,
    ParseResult,
    Segment,
    TextSegment,
    ValidationResult,
)

MAX_ANNOUNCEMENT_BODY_LINKS = 10
DEFAULT_PREVIEW_LENGTH = 120
BODY_LINKS_ERROR_KEY = "settings.admin.validation_body_links"

REJECTED_SCHEMES = ("javascript:", "data:", "file:", "intent:", "vbscript:")

# \s does not cover U+FEFF.
_CONTROL_OR_WHITESPACE = re.compile(r"[\x00-\x1f\x7f\s\ufeff]")
_WHITESPACE_RUN = re.compile(r"[\s\ufeff]+")
_EDGE_WHITESPACE = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")
_URL_ADAPTER = TypeAdapter(AnyUrl)

_logger = logging.getLogger(__name__)


class _ScanState(Enum):
    TEXT = "text"
    SEEK_CLOSE_BRACKET = "seek_close_bracket"
    SEEK_OPEN_PAREN = "seek_open_paren"
    SEEK_CLOSE_PAREN = "seek_close_paren"


class _SegmentBuilder:
    """Collects segments, merging consecutive text into one segment."""

    def __init__(self) -> None:
        self.segments: list[Segment] = []
        self._pending: list[str] = []

    def text(self, value: str) -> None:
        if value:
            self._pending.append(value)

    def link(self, segment: LinkSegment) -> None:
        self._flush()
        self.segments.append(segment)

    def build(self) -> list[Segment]:
        self._flush()
        return self.segments

    def _flush(self) -> None:
        if self._pending:
            self.segments.append(TextSegment("".join(self._pending)))
            self._pending = []


def validate_link_target(raw_url: str, *, allow_http: bool = False) -> LinkTarget | None:
    """Return the accepted target, or None when the link must stay text."""
    url = _EDGE_WHITESPACE.sub("", raw_url)
    if not url:
        return None
    if _CONTROL_OR_WHITESPACE.search(url):
        return None

    lowered = url.lower()
    if lowered.startswith(REJECTED_SCHEMES):
        return None
    if url.startswith("/"):
        return LinkTarget(url=url, is_internal=True)
    if lowered.startswith("mailto:"):
        return LinkTarget(url=url, is_internal=False)

    if lowered.startswith("https://") or (allow_http and lowered.startswith("http://")):
        try:
            parsed = _URL_ADAPTER.validate_python(url)
        except ValidationError:
            return None
        if parsed.scheme == "https" or (allow_http and parsed.scheme == "http"):
            return LinkTarget(url=url, is_internal=False)
    return None


def parse_announcement_body(  # noqa: PLR0912
    body: str,
    *,
    max_links: int = MAX_ANNOUNCEMENT_BODY_LINKS,
    allow_http: bool = False,
) -> ParseResult:
    """Split an announcement body into text and link segments."""
    meta = ParseMeta()
    if not body:
        return ParseResult(segments=[], meta=meta)

    max_links = max(0, max_links)
    out = _SegmentBuilder()
    state = _ScanState.TEXT
    cursor = open_bracket = close_bracket = 0

    while True:
        if state is _ScanState.TEXT:
            open_bracket = body.find("[", cursor)
            if open_bracket == -1:
                out.text(body[cursor:])
                break
            if meta.processed_link_count >= max_links:
                meta = replace(meta, max_links_reached=True)
                out.text(body[cursor:])
                break
            out.text(body[cursor:open_bracket])
            state = _ScanState.SEEK_CLOSE_BRACKET

        elif state is _ScanState.SEEK_CLOSE_BRACKET:
            close_bracket = body.find("]", open_bracket + 1)
            if close_bracket == -1:
                out.text(body[open_bracket:])
                break
            state = _ScanState.SEEK_OPEN_PAREN

        elif state is _ScanState.SEEK_OPEN_PAREN:
            if body[close_bracket + 1 : close_bracket + 2] != "(":
                # A lone "[" is literal text; rescan right after it.
                out.text("[")
                cursor = open_bracket + 1
                state = _ScanState.TEXT
                continue
            state = _ScanState.SEEK_CLOSE_PAREN

        else:
            close_paren = body.find(")", close_bracket + 2)
            if close_paren == -1:
                meta = replace(meta, has_malformed_link_syntax=True)
                out.text(body[open_bracket:])
                break

            label = body[open_bracket + 1 : close_bracket]
            raw_url = body[close_bracket + 2 : close_paren]
            cursor = close_paren + 1
            state = _ScanState.TEXT

            if not label or not raw_url:
                meta = replace(meta, has_malformed_link_syntax=True)
                out.text(body[open_bracket:cursor])
                continue

            target = validate_link_target(raw_url, allow_http=allow_http)
            if target is None:
                meta = replace(meta, has_invalid_link_target=True)
                out.text(f"{label} ({raw_url})")
                continue

            out.link(LinkSegment(text=label, url=target.url, is_internal=target.is_internal))
            meta = replace(meta, processed_link_count=meta.processed_link_count + 1)

    return ParseResult(segments=out.build(), meta=meta)


def project_plain_text(
    body: str,
    *,
    max_links: int = MAX_ANNOUNCEMENT_BODY_LINKS,
    max_length: int = DEFAULT_PREVIEW_LENGTH,
    allow_http: bool = False,
) -> str:
    """Single-line preview: link labels only, whitespace collapsed, truncated."""
    parsed = parse_announcement_body(body, max_links=max_links, allow_http=allow_http)
    plain = "".join(segment.text for segment in parsed.segments)
    normalized = _WHITESPACE_RUN.sub(" ", plain).strip()
    if not normalized or len(normalized) <= max_length:
        return normalized
    return f"{normalized[: max_length - 1]}…"


def validate_announcement_body(
    body: str,
    *,
    max_links: int = MAX_ANNOUNCEMENT_BODY_LINKS,
    allow_http: bool = False,
) -> ValidationResult:
    """Reject bodies with malformed or unsafe links."""
    parsed = parse_announcement_body(body, max_links=max_links, allow_http=allow_http)
    if parsed.meta.has_malformed_link_syntax or parsed.meta.has_invalid_link_target:
        return ValidationResult(valid=False, error_key=BODY_LINKS_ERROR_KEY)
    return ValidationResult(valid=True)


@dataclass
class AnnouncementService:
    """Announcement body handling with configured limits."""

    max_links: int = MAX_ANNOUNCEMENT_BODY_LINKS
    preview_length: int = DEFAULT_PREVIEW_LENGTH
    allow_http: bool = False
    debug: bool = False

    def parse(self, body: str) -> ParseResult:
        """Parse a body into segments for rendering."""
        parsed = parse_announcement_body(
            body, max_links=self.max_links, allow_http=self.allow_http
        )
        if parsed.meta.max_links_reached:
            _logger.info(
                "Announcement link cap reached: max_links=%s", self.max_links
            )
        return parsed

    def preview(self, body: str) -> str:
        """Return the plain-text preview line."""
        return project_plain_text(
            body,
            max_links=self.max_links,
            max_length=self.preview_length,
            allow_http=self.allow_http,
        )

    def validate(self, body: str) -> ValidationResult:
        """Validate a body before publishing."""
        parsed = parse_announcement_body(
            body, max_links=self.max_links, allow_http=self.allow_http
        )
        if parsed.meta.has_malformed_link_syntax or parsed.meta.has_invalid_link_target:
            _logger.warning(
                "Announcement body rejected: malformed=%s invalid_target=%s links=%s",
                parsed.meta.has_malformed_link_syntax,
                parsed.meta.has_invalid_link_target,
                parsed.meta.processed_link_count,
            )
            return ValidationResult(valid=False, error_key=BODY_LINKS_ERROR_KEY)
        if self.debug:
            _logger.info(
                "Announcement body accepted: links=%s",
                parsed.meta.processed_link_count,
            )
        return ValidationResult(valid=True)
