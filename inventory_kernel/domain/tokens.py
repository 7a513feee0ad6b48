"""
Token resolvers -- render pattern tokens into text.

Responsibility:
    Pure functions turning one token (calendar field, sequence number,
    random digit group) into its textual form, plus the random suffix used
    to disambiguate colliding identifiers.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  Time and randomness
    arrive as inputs (``RenderContext``); nothing here reads the system clock
    or a global random generator.

Invariants enforced:
    - ``{RANDOM:N}`` renders exactly N decimal digits with a non-zero
      leading digit, uniform over ``[10**(N-1), 10**N - 1]``.  Digits are
      drawn one at a time, so N is not bounded by integer-to-string limits.
    - Calendar tokens are rendered in UTC; naive instants are taken as UTC.
    - Each random token occurrence draws independently from the injected
      generator, so a seeded ``random.Random`` makes output reproducible.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

_LEADING_DIGITS = string.digits[1:]


class TokenKind(str, Enum):
    """Recognized token names (matched case-insensitively)."""

    YEAR = "YYYY"
    MONTH = "MM"
    DAY = "DD"
    SEQUENCE = "SEQ"
    RANDOM = "RANDOM"


@dataclass(frozen=True)
class TokenSegment:
    """A placeholder segment; ``digits`` is set only for RANDOM tokens."""

    kind: TokenKind
    digits: int | None = None


@dataclass(frozen=True)
class RenderContext:
    """
    Inputs for rendering one candidate identifier.

    Attributes:
        instant: Generation instant (rendered in UTC).
        sequence: Reserved or peeked sequence number.
        rng: Random source for ``{RANDOM:N}`` tokens.
    """

    instant: datetime
    sequence: int
    rng: random.Random

    @property
    def utc_instant(self) -> datetime:
        if self.instant.tzinfo is None:
            return self.instant.replace(tzinfo=timezone.utc)
        return self.instant.astimezone(timezone.utc)


def render_year(token: TokenSegment, context: RenderContext) -> str:
    return f"{context.utc_instant.year:04d}"


def render_month(token: TokenSegment, context: RenderContext) -> str:
    return f"{context.utc_instant.month:02d}"


def render_day(token: TokenSegment, context: RenderContext) -> str:
    return f"{context.utc_instant.day:02d}"


def render_sequence(token: TokenSegment, context: RenderContext) -> str:
    return str(context.sequence)


def render_random(token: TokenSegment, context: RenderContext) -> str:
    """Render exactly ``token.digits`` digits, leading digit non-zero."""
    digits = token.digits
    if digits is None or digits <= 0:
        raise ValueError(f"RANDOM token requires a positive digit count, got {digits!r}")
    rng = context.rng
    return rng.choice(_LEADING_DIGITS) + "".join(
        rng.choice(string.digits) for _ in range(digits - 1)
    )


_RESOLVERS: dict[TokenKind, Callable[[TokenSegment, RenderContext], str]] = {
    TokenKind.YEAR: render_year,
    TokenKind.MONTH: render_month,
    TokenKind.DAY: render_day,
    TokenKind.SEQUENCE: render_sequence,
    TokenKind.RANDOM: render_random,
}


def resolve_token(token: TokenSegment, context: RenderContext) -> str:
    """Render a single token segment."""
    return _RESOLVERS[token.kind](token, context)


def disambiguation_suffix(rng: random.Random, length: int = 6) -> str:
    """
    Build a lowercase alphanumeric suffix of ``length`` characters.

    Raises:
        ValueError: If length is not positive.
    """
    if length <= 0:
        raise ValueError(f"Suffix length must be positive, got {length}")
    return "".join(rng.choice(SUFFIX_ALPHABET) for _ in range(length))
