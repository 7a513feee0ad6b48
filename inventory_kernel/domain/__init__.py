"""
Pure domain layer.

Pattern compilation, token rendering and the clock abstraction, with NO
dependencies on:
- ORM (SQLAlchemy)
- Database
- System time or global randomness
"""

from inventory_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from inventory_kernel.domain.dtos import InventoryInfo, ItemInfo
from inventory_kernel.domain.pattern import (
    DEFAULT_PATTERN,
    LiteralSegment,
    Segment,
    compile_pattern,
    pattern_tokens,
    render_pattern,
)
from inventory_kernel.domain.tokens import (
    RenderContext,
    TokenKind,
    TokenSegment,
    disambiguation_suffix,
    resolve_token,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "InventoryInfo",
    "ItemInfo",
    "DEFAULT_PATTERN",
    "LiteralSegment",
    "Segment",
    "compile_pattern",
    "pattern_tokens",
    "render_pattern",
    "RenderContext",
    "TokenKind",
    "TokenSegment",
    "disambiguation_suffix",
    "resolve_token",
]
