"""List query construction: text filter plus pagination window.

``limit`` and ``offset`` arrive unvalidated (query-string text, numbers,
or nothing at all). They are coerced leniently and clamped, so building
a query never fails.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any

from resource_service.resources.identifiers import MAX_KEY

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_OFFSET = 0

_SELECT_COLUMNS = "id, name, details, created_at, updated_at"
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def coerce_int(value: Any, default: int) -> int:
    """Best-effort integer conversion.

    Integers pass through, finite floats truncate toward zero, and strings
    use their leading optionally-signed digits (``"12abc"`` -> 12).
    Anything else, including booleans, gives ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else default
    return default


@dataclass(frozen=True)
class PageWindow:
    """Clamped pagination bounds."""

    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET


def clamp_window(limit: Any = None, offset: Any = None) -> PageWindow:
    """Coerce raw limit/offset and clamp them to safe ranges.

    ``limit`` ends up in [1, 100]; ``offset`` in [0, MAX_KEY]. SQLite cannot
    bind larger integers, and any offset past the largest key is an empty
    page anyway.
    """
    lim = coerce_int(limit, DEFAULT_LIMIT)
    off = coerce_int(offset, DEFAULT_OFFSET)
    return PageWindow(
        limit=min(MAX_LIMIT, max(MIN_LIMIT, lim)),
        offset=min(MAX_KEY, max(0, off)),
    )


@dataclass(frozen=True)
class ResourceQuery:
    """A filtered, paginated listing ready to execute."""

    window: PageWindow
    where_sql: str = ""
    params: list[Any] = field(default_factory=list)

    @property
    def count_sql(self) -> str:
        return f"SELECT COUNT(*) FROM resources{self.where_sql}"

    @property
    def page_sql(self) -> str:
        return (
            f"SELECT {_SELECT_COLUMNS} FROM resources{self.where_sql} "
            "ORDER BY id ASC LIMIT ? OFFSET ?"
        )

    @property
    def page_params(self) -> list[Any]:
        return [*self.params, self.window.limit, self.window.offset]


def build_query(q: Any = None, limit: Any = None, offset: Any = None) -> ResourceQuery:
    """Build the list query for an optional search term and window.

    A non-blank ``q`` matches records whose name or details contain it,
    case-insensitively. The term itself is matched untrimmed; trimming
    only decides whether a filter applies. Both sides are folded by SQLite
    ``lower()`` so they agree; it only folds ASCII letters, so non-ASCII
    text matches case-sensitively.

    Args:
        q: Free-text search term
        limit: Page size, any type
        offset: Records to skip, any type

    Returns:
        ResourceQuery with SQL, parameters and the clamped window
    """
    window = clamp_window(limit, offset)
    if not isinstance(q, str) or not q.strip():
        return ResourceQuery(window=window)

    return ResourceQuery(
        window=window,
        where_sql=(
            " WHERE instr(lower(name), lower(?)) > 0 OR instr(lower(details), lower(?)) > 0"
        ),
        params=[q, q],
    )
