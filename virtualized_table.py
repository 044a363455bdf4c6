import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Hashable, Iterable, Optional, Sequence

from column_layout import ColumnDefinition, ResolvedColumn, compute_layout
from dataset import as_dataset, row_ids
from display_state import DisplayState, display_state
from row_renderer import (
    SELECTION_WIDTH,
    HeaderRow,
    RenderedRow,
    error_row,
    render_header,
    render_row,
    skeleton_row,
)
from selection_model import SelectionAggregate, SelectionModel, aggregate_from_counts
from table_errors import ConfigurationFault, RenderFault
from window_calculator import (
    EMPTY_RANGE,
    VisibleRange,
    compute_visible_range,
    max_scroll_offset,
    scroll_offset_for_index,
)

logger = logging.getLogger(__name__)

DEFAULT_EMPTY_MESSAGE = "No data available"
DEFAULT_SKELETON_ROWS = 5


@dataclass(frozen=True)
class TableFrame:
    """Everything a host needs to paint one frame of the table."""

    state: DisplayState
    header: HeaderRow
    rows: tuple[RenderedRow, ...]
    visible_range: VisibleRange
    layout: tuple[ResolvedColumn, ...]
    message: Optional[str]
    faults: tuple[RenderFault, ...]
    scroll_offset: float
    item_count: int
    item_height: int
    selectable: bool


class VirtualizedTable:
    """Renders only the visible slice of a row collection.

    Rows are materialized for the current visible range only and kept in a
    cache bounded to that range; scrolling renders just the rows that enter
    the window. Selection lives in a SelectionModel keyed by row id, so it
    survives scrolling, and a selection change re-renders only the selection
    indicator of rows whose state flipped.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDefinition],
        *,
        viewport_height: int,
        item_height: int,
        total_width: int,
        data=(),
        row_key: Optional[Callable[[Any, int], Hashable]] = None,
        on_row_click: Optional[Callable[[Any, int], None]] = None,
        on_row_select: Optional[Callable[[Any, int, bool], None]] = None,
        selectable: Optional[bool] = None,
        selected: Iterable[Hashable] = (),
        selection: Optional[SelectionModel] = None,
        loading: bool = False,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
        overscan: int = 0,
        skeleton_rows: int = DEFAULT_SKELETON_ROWS,
        row_style=None,
        min_col_width: int = 1,
    ):
        if item_height is None or item_height <= 0:
            raise ConfigurationFault(f"item_height must be > 0, got {item_height!r}")
        self.item_height = item_height
        self.viewport_height = max(0, viewport_height)
        self.total_width = max(0, total_width)
        self.row_key = row_key
        self.on_row_click = on_row_click
        self.on_row_select = on_row_select
        self.selectable = on_row_select is not None if selectable is None else selectable
        self.loading = loading
        self.empty_message = empty_message
        self.overscan = max(0, overscan)
        self.skeleton_rows = max(0, skeleton_rows)
        self.row_style = row_style
        self.min_col_width = min_col_width

        self.selection = selection if selection is not None else SelectionModel(selected)

        self._columns: tuple[ColumnDefinition, ...] = tuple(columns)
        self._layout: tuple[ResolvedColumn, ...] = ()
        self._data: Sequence = ()
        self._ids: Optional[list] = None
        # distinct ids of the current data and how many of them are selected
        self._id_set: Optional[frozenset] = None
        self._hits = 0

        self._scroll_offset = 0
        self._rows: dict[int, RenderedRow] = {}
        self._row_ids: dict[int, Hashable] = {}
        self._dirty: set[int] = set()

        self.set_data(data)
        self._unsubscribe = self.selection.subscribe(self._on_selection_change)

    # ---------- configuration ----------
    @property
    def columns(self):
        return self._columns

    @property
    def layout(self):
        return self._layout

    @property
    def data(self):
        return self._data

    @property
    def item_count(self) -> int:
        return len(self._data)

    @property
    def scroll_offset(self):
        return self._scroll_offset

    def set_columns(self, columns: Sequence[ColumnDefinition]):
        previous = self._columns
        self._columns = tuple(columns)
        try:
            self._relayout()
        except ConfigurationFault:
            self._columns = previous
            raise

    def set_data(self, data):
        self._data = as_dataset(data)
        self._ids = None
        self._id_set = None
        self._relayout()
        self._scroll_offset = self._clamp_offset(self._scroll_offset)

    def set_loading(self, loading: bool):
        self.loading = bool(loading)

    def set_empty_message(self, message: str):
        self.empty_message = message

    def invalidate(self):
        """Forget rendered rows; for callers that mutate data in place."""
        self._ids = None
        self._id_set = None
        self._drop_rows()

    def close(self):
        self._unsubscribe()

    def _relayout(self):
        reserved = SELECTION_WIDTH if self.selectable else 0
        self._layout = compute_layout(
            self._columns,
            self.total_width,
            reserved=reserved,
            default_min_width=self.min_col_width,
        )
        self._drop_rows()

    def _drop_rows(self):
        self._rows.clear()
        self._row_ids.clear()
        self._dirty.clear()

    # ---------- viewport events ----------
    def _clamp_offset(self, offset):
        limit = max_scroll_offset(self.viewport_height, self.item_height, len(self._data))
        return min(max(0, offset), limit)

    def handle_scroll(self, offset):
        """Record the latest scroll offset; the range is computed at render time."""
        self._scroll_offset = self._clamp_offset(offset)

    def scroll_by(self, delta):
        self.handle_scroll(self._scroll_offset + delta)

    def scroll_to_index(self, index: int):
        if not self._data:
            return
        index = min(max(0, index), len(self._data) - 1)
        self.handle_scroll(
            scroll_offset_for_index(
                index, self._scroll_offset, self.viewport_height, self.item_height
            )
        )

    def handle_resize(self, viewport_height=None, total_width=None):
        if viewport_height is not None:
            self.viewport_height = max(0, viewport_height)
        if total_width is not None and total_width != self.total_width:
            self.total_width = max(0, total_width)
            self._relayout()
        self._scroll_offset = self._clamp_offset(self._scroll_offset)

    @property
    def visible_range(self) -> VisibleRange:
        if display_state(self.loading, len(self._data)) is not DisplayState.POPULATED:
            return EMPTY_RANGE
        return compute_visible_range(
            self._scroll_offset,
            self.viewport_height,
            self.item_height,
            len(self._data),
            self.overscan,
        )

    @property
    def page_size(self) -> int:
        return max(1, int(self.viewport_height // self.item_height))

    # ---------- rendering ----------
    def render(self) -> TableFrame:
        state = display_state(self.loading, len(self._data))
        message = None
        visible = EMPTY_RANGE

        if state is DisplayState.LOADING:
            rows = tuple(skeleton_row(i, self._layout) for i in range(self.skeleton_rows))
            header = render_header(
                self._layout,
                SelectionAggregate.NONE if self.selectable else None,
                select_all_enabled=False,
            )
        elif state is DisplayState.EMPTY:
            self._drop_rows()
            rows = ()
            message = self.empty_message
            header = render_header(
                self._layout,
                SelectionAggregate.NONE if self.selectable else None,
                select_all_enabled=False,
            )
        else:
            visible = compute_visible_range(
                self._scroll_offset,
                self.viewport_height,
                self.item_height,
                len(self._data),
                self.overscan,
            )
            rows = self._materialize(visible)
            header = render_header(
                self._layout, self._select_all_state() if self.selectable else None
            )

        return TableFrame(
            state=state,
            header=header,
            rows=rows,
            visible_range=visible,
            layout=self._layout,
            message=message,
            faults=tuple(row.fault for row in rows if row.fault is not None),
            scroll_offset=self._scroll_offset,
            item_count=len(self._data),
            item_height=self.item_height,
            selectable=self.selectable,
        )

    def _materialize(self, visible: VisibleRange) -> tuple[RenderedRow, ...]:
        for index in [i for i in self._rows if i not in visible]:
            del self._rows[index]
            self._row_ids.pop(index, None)
            self._dirty.discard(index)

        rows = []
        for index in visible:
            row = self._rows.get(index)
            if row is None:
                row = self._render_index(index)
            elif index in self._dirty:
                row = replace(row, selected=self._is_row_selected(index))
            self._rows[index] = row
            rows.append(row)
        self._dirty.clear()
        return tuple(rows)

    def _render_index(self, index: int) -> RenderedRow:
        item = self._data[index]
        self._row_ids[index] = self.row_id(index)
        selected = self._is_row_selected(index)
        try:
            return render_row(
                item,
                index,
                self._layout,
                self._columns,
                selected=selected,
                row_style=self.row_style,
            )
        except RenderFault as fault:
            logger.warning("row %d rendered as placeholder: %s", index, fault)
            return error_row(index, self._layout, fault, selected)

    def _is_row_selected(self, index):
        if not self.selectable:
            return None
        return self.selection.is_selected(self.row_id(index))

    # ---------- identifiers ----------
    def row_id(self, index: int) -> Hashable:
        if index in self._row_ids:
            return self._row_ids[index]
        if self.row_key is None:
            return index
        return self.row_key(self._data[index], index)

    def all_ids(self) -> list:
        if self._ids is None:
            self._ids = row_ids(self._data, self.row_key)
        return self._ids

    def _current_id_set(self) -> frozenset:
        if self._id_set is None:
            self._id_set = frozenset(self.all_ids())
            self._hits = len(self._id_set & self.selection.snapshot)
        return self._id_set

    def _select_all_state(self) -> SelectionAggregate:
        ids = self._current_id_set()
        return aggregate_from_counts(self._hits, len(ids))

    def _on_selection_change(self, added, removed):
        if self._id_set is not None:
            self._hits += len(added & self._id_set) - len(removed & self._id_set)
        changed = added | removed
        for index, row_id in self._row_ids.items():
            if row_id in changed:
                self._dirty.add(index)

    # ---------- interaction ----------
    def _item(self, index: int):
        if not 0 <= index < len(self._data):
            raise IndexError(f"row {index} out of range for {len(self._data)} rows")
        return self._data[index]

    def click_row(self, index: int):
        item = self._item(index)
        if self.on_row_click is not None:
            self.on_row_click(item, index)

    def set_row_selected(self, index: int, selected: bool) -> bool:
        item = self._item(index)
        changed = self.selection.set_selected(self.row_id(index), selected)
        if changed and self.on_row_select is not None:
            self.on_row_select(item, index, selected)
        return changed

    def toggle_row(self, index: int) -> bool:
        """Flip one row's selection; returns the new state."""
        self._item(index)
        selected = not self.selection.is_selected(self.row_id(index))
        self.set_row_selected(index, selected)
        return selected

    def select_all(self):
        self._apply_to_all(True)

    def clear_selection(self):
        removed = self.selection.clear()
        self._notify(removed, False)

    def toggle_all(self) -> bool:
        """Select every row of the data set unless all are already selected."""
        target = self._select_all_state() is not SelectionAggregate.ALL
        self._apply_to_all(target)
        return target

    def _apply_to_all(self, selected: bool):
        ids = self.all_ids()
        if selected:
            changed = self.selection.select_all(ids)
        else:
            changed = self.selection.deselect_all(ids)
        self._notify(changed, selected)

    def _notify(self, changed_ids, selected):
        if not changed_ids or self.on_row_select is None:
            return
        for index, row_id in enumerate(self.all_ids()):
            if row_id in changed_ids:
                self.on_row_select(self._data[index], index, selected)

    def selected_items(self) -> list:
        selected = self.selection.snapshot
        return [self._data[i] for i, row_id in enumerate(self.all_ids()) if row_id in selected]

    def stale_selection(self) -> frozenset:
        return self.selection.stale_ids(self.all_ids())

    def reconcile_selection(self) -> frozenset:
        return self.selection.reconcile(self.all_ids())
