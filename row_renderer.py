from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import pandas as pd

from column_layout import ColumnDefinition, ResolvedColumn
from selection_model import SelectionAggregate
from table_errors import RenderFault

SELECTION_WIDTH = 4  # "[x] "
SKELETON_CHAR = "░"
ERROR_TEXT = "<render error>"

_MARKERS = {
    True: "[x]",
    False: "[ ]",
    SelectionAggregate.ALL: "[x]",
    SelectionAggregate.SOME: "[-]",
    SelectionAggregate.NONE: "[ ]",
}


@dataclass(frozen=True)
class RenderedRow:
    index: int
    cells: tuple[str, ...]
    selected: Optional[bool] = None  # None when there is no selection control
    style: Optional[str] = None
    fault: Optional[RenderFault] = None
    placeholder: bool = False


@dataclass(frozen=True)
class HeaderRow:
    cells: tuple[str, ...]
    select_all: Optional[SelectionAggregate] = None
    select_all_enabled: bool = True


def format_value(value) -> str:
    if value is None:
        return ""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    return str(value).replace("\n", " ").replace("\t", " ")


def fit_cell(text: str, width: int, align: str) -> str:
    if width <= 0:
        return ""
    text = text[:width]
    if align == "right":
        return text.rjust(width)
    if align == "center":
        return text.center(width)
    return text.ljust(width)


def selection_marker(state) -> str:
    return _MARKERS[state].ljust(SELECTION_WIDTH)


def _resolve_style(row_style, item, index):
    if row_style is None:
        return None
    if callable(row_style):
        return row_style(item, index)
    return row_style


def render_row(
    item: Any,
    index: int,
    layout: Sequence[ResolvedColumn],
    columns: Sequence[ColumnDefinition],
    *,
    selected: Optional[bool] = None,
    row_style: str | Callable[[Any, int], str] | None = None,
) -> RenderedRow:
    """Render one row; raises RenderFault if any column render raises.

    `layout` must come from compute_layout over the same `columns`.
    """
    cells = []
    for col, slot in zip(columns, layout):
        try:
            value = col.render(item, index)
        except Exception as exc:
            raise RenderFault(index, col.key, exc) from exc
        cells.append(fit_cell(format_value(value), slot.width, slot.align))
    try:
        style = _resolve_style(row_style, item, index)
    except Exception as exc:
        raise RenderFault(index, "row_style", exc) from exc
    return RenderedRow(index=index, cells=tuple(cells), selected=selected, style=style)


def render_header(
    layout: Sequence[ResolvedColumn],
    select_all: Optional[SelectionAggregate] = None,
    select_all_enabled: bool = True,
) -> HeaderRow:
    cells = tuple(fit_cell(slot.header, slot.width, slot.align) for slot in layout)
    return HeaderRow(cells, select_all, select_all_enabled)


def error_row(index, layout, fault, selected=None) -> RenderedRow:
    cells = [" " * slot.width for slot in layout]
    if cells:
        cells[0] = fit_cell(ERROR_TEXT, layout[0].width, "left")
    return RenderedRow(
        index=index, cells=tuple(cells), selected=selected, style="error", fault=fault
    )


def skeleton_row(index, layout) -> RenderedRow:
    # bars leave a one cell margin so adjacent columns stay distinguishable
    cells = tuple(
        (SKELETON_CHAR * max(0, slot.width - 1)).ljust(slot.width) for slot in layout
    )
    return RenderedRow(index=index, cells=cells, style="skeleton", placeholder=True)


def compose_line(cells: Sequence[str], layout: Sequence[ResolvedColumn], prefix="") -> str:
    """Lay cells out at their resolved offsets behind an optional prefix."""
    line = prefix
    for cell, slot in zip(cells, layout):
        line = line.ljust(len(prefix) + slot.offset) + cell
    return line


def row_line(row: RenderedRow, layout, selectable: bool) -> str:
    prefix = ""
    if selectable and row.placeholder:
        prefix = " " * SELECTION_WIDTH
    elif selectable:
        prefix = selection_marker(bool(row.selected))
    return compose_line(row.cells, layout, prefix)


def header_line(header: HeaderRow, layout) -> str:
    prefix = ""
    if header.select_all is not None:
        prefix = selection_marker(header.select_all)
    return compose_line(header.cells, layout, prefix)
