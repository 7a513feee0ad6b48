"""
Pattern compiler -- parse identifier templates into segments.

Responsibility:
    Turns a template such as ``INV-{YYYY}-{SEQ}`` into an ordered tuple of
    literal and token segments, and renders such a tuple back into text.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  Templates are parsed
    fresh on every call; nothing is cached.

Invariants enforced:
    - ``compile_pattern`` never raises.  Any ``{...}`` text that is not a
      recognized token renders as literal text, braces included.
    - ``{RANDOM:N}`` is a token only when N is a base-10 integer literal
      greater than zero; otherwise the whole ``{RANDOM:...}`` is literal.
    - Token names match case-insensitively (``{yyyy}`` == ``{YYYY}``).
    - Adjacent literal text is merged, so a template without tokens
      compiles to at most one literal segment and renders unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from inventory_kernel.domain.tokens import (
    RenderContext,
    TokenKind,
    TokenSegment,
    resolve_token,
)

DEFAULT_PATTERN = "INV-{YYYY}-{SEQ}"

_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")
_RANDOM_BODY = re.compile(r"RANDOM:(.*)", re.IGNORECASE | re.DOTALL)
_DIGITS = re.compile(r"[0-9]+")

_SIMPLE_TOKENS = {
    TokenKind.YEAR.value: TokenKind.YEAR,
    TokenKind.MONTH.value: TokenKind.MONTH,
    TokenKind.DAY.value: TokenKind.DAY,
    TokenKind.SEQUENCE.value: TokenKind.SEQUENCE,
}


@dataclass(frozen=True)
class LiteralSegment:
    """Text copied verbatim into the rendered identifier."""

    text: str


Segment = Union[LiteralSegment, TokenSegment]


def _parse_placeholder(body: str) -> TokenSegment | None:
    """Return the token for a ``{body}`` placeholder, or None if unrecognized."""
    simple = _SIMPLE_TOKENS.get(body.upper())
    if simple is not None:
        return TokenSegment(simple)

    match = _RANDOM_BODY.fullmatch(body)
    if match is None:
        return None

    count = match.group(1)
    if not _DIGITS.fullmatch(count):
        return None
    digits = int(count)
    if digits <= 0:
        return None
    return TokenSegment(TokenKind.RANDOM, digits=digits)


def compile_pattern(template: str) -> tuple[Segment, ...]:
    """
    Parse a template into ordered segments.

    Args:
        template: Identifier template, e.g. ``"INV-{YYYY}-{SEQ}"``.

    Returns:
        Tuple of LiteralSegment / TokenSegment in template order.
    """
    segments: list[Segment] = []
    position = 0

    for match in _PLACEHOLDER.finditer(template):
        token = _parse_placeholder(match.group(1))
        if token is None:
            # Unrecognized placeholder stays part of the surrounding literal
            continue
        if match.start() > position:
            segments.append(LiteralSegment(template[position:match.start()]))
        segments.append(token)
        position = match.end()

    if position < len(template):
        segments.append(LiteralSegment(template[position:]))

    return tuple(segments)


def render_pattern(segments: tuple[Segment, ...], context: RenderContext) -> str:
    """Render compiled segments into an identifier string."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, LiteralSegment):
            parts.append(segment.text)
        else:
            parts.append(resolve_token(segment, context))
    return "".join(parts)


def pattern_tokens(segments: tuple[Segment, ...]) -> list[TokenSegment]:
    """Token segments of a compiled pattern, in order."""
    return [s for s in segments if isinstance(s, TokenSegment)]
