import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from table_errors import ConfigurationFault

logger = logging.getLogger(__name__)

ALIGNMENTS = ("left", "center", "right")


@dataclass(frozen=True)
class ColumnDefinition:
    """One table column: a label plus a pure render function item x index -> value."""

    key: str
    header: str
    render: Callable[[Any, int], Any]
    width: Optional[int | str] = None  # cells, or a percentage string like "25%"
    min_width: Optional[int] = None
    align: str = "left"
    sortable: bool = False


@dataclass(frozen=True)
class ResolvedColumn:
    key: str
    header: str
    width: int
    align: str
    offset: int  # x position relative to the first column


def _parse_percent(width: str) -> float:
    text = width.strip()
    if not text.endswith("%"):
        raise ConfigurationFault(f"width {width!r} must be an int or a percentage")
    try:
        pct = float(text[:-1])
    except ValueError:
        raise ConfigurationFault(f"width {width!r} is not a valid percentage") from None
    if pct < 0:
        raise ConfigurationFault(f"width {width!r} must not be negative")
    return pct


def validate_columns(columns: Sequence[ColumnDefinition]) -> None:
    if not columns:
        raise ConfigurationFault("at least one column is required")
    seen = set()
    for col in columns:
        if col.key in seen:
            raise ConfigurationFault(f"duplicate column key {col.key!r}")
        seen.add(col.key)
        if not callable(col.render):
            raise ConfigurationFault(f"column {col.key!r} render is not callable")
        if col.align not in ALIGNMENTS:
            raise ConfigurationFault(
                f"column {col.key!r} align must be one of {ALIGNMENTS}, got {col.align!r}"
            )
        if isinstance(col.width, str):
            _parse_percent(col.width)
        elif col.width is not None and (isinstance(col.width, bool) or col.width < 0):
            raise ConfigurationFault(f"column {col.key!r} width {col.width!r} is invalid")
        if col.min_width is not None and col.min_width < 0:
            raise ConfigurationFault(f"column {col.key!r} min_width must be >= 0")


def compute_layout(
    columns: Sequence[ColumnDefinition],
    total_width: int,
    *,
    reserved: int = 0,
    gap: int = 1,
    default_min_width: int = 1,
) -> tuple[ResolvedColumn, ...]:
    """Resolve column widths once; header and every row share the result.

    `reserved` cells (the selection control) and the gaps between columns are
    taken off `total_width` before distribution. Columns without a width get an
    equal share of what remains, then every width is floored at its min width.
    """
    try:
        validate_columns(columns)
    except ConfigurationFault:
        logger.error("rejected column configuration", exc_info=True)
        raise

    count = len(columns)
    available = max(0, total_width - reserved - gap * (count - 1))
    share = available // count

    resolved = []
    x = 0
    for col in columns:
        if isinstance(col.width, str):
            width = int(available * _parse_percent(col.width) / 100)
        elif col.width is not None:
            width = int(col.width)
        else:
            width = share
        floor = col.min_width if col.min_width is not None else default_min_width
        width = max(width, floor)
        resolved.append(ResolvedColumn(col.key, col.header, width, col.align, x))
        x += width + gap
    return tuple(resolved)

