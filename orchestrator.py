import curses
import logging
import time

from column_layout import ColumnDefinition
from data_loader import BackgroundLoader
from dataset import columns_from_frame, frame_row_key
from screen_layout import ScreenLayout
from status_bar import render_status
from table_controller import TableController
from table_pane import TablePane
from virtualized_table import VirtualizedTable

logger = logging.getLogger(__name__)

PLACEHOLDER_COLUMNS = (
    ColumnDefinition(key="loading", header="Loading…", render=lambda item, index: ""),
)


class Orchestrator:
    def __init__(self, stdscr, loader_fn, load_state, file_path, config):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.timeout(100)

        self.config = config
        self.file_path = file_path
        self.load_state = load_state
        self.loader = BackgroundLoader(loader_fn, load_state)

        self.layout = ScreenLayout(stdscr)
        self.pane = TablePane()

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

        self.table = VirtualizedTable(
            PLACEHOLDER_COLUMNS,
            viewport_height=self.layout.body_h * config["ITEM_HEIGHT"],
            item_height=config["ITEM_HEIGHT"],
            total_width=self.layout.W,
            row_key=frame_row_key,
            on_row_click=self._on_row_click,
            selectable=True,
            loading=True,
            empty_message=config["EMPTY_MESSAGE"],
            overscan=config["OVERSCAN"],
            skeleton_rows=config["SKELETON_ROWS"],
            min_col_width=config["MIN_COL_WIDTH"],
        )
        self.controller = TableController(self.table, self._set_status)
        self.frame = None

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _on_row_click(self, item, index):
        values = ", ".join(f"{k}={v}" for k, v in item.items())
        self._set_status(f"Row {index}: {values}", 4)

    def _poll_loader(self):
        if not self.table.loading or not self.load_state.done:
            return
        if self.load_state.error is not None:
            self._set_status(f"Load failed: {self.load_state.error}", 8)
            self.table.set_data(())
        else:
            df = self.load_state.df
            if len(df.columns):
                self.table.set_columns(
                    columns_from_frame(
                        df,
                        fit_content=self.config["FIT_CONTENT"],
                        min_width=self.config["MIN_COL_WIDTH"],
                    )
                )
            self.table.set_data(df)
            logger.info("loaded %d rows x %d columns", len(df), len(df.columns))
        self.table.set_loading(False)
        self.controller.clamp_cursor()

    def _resize(self):
        try:
            curses.update_lines_cols()
        except AttributeError:
            pass
        self.stdscr.clear()
        self.layout = ScreenLayout(self.stdscr)
        self.table.handle_resize(
            viewport_height=self.layout.body_h * self.table.item_height,
            total_width=self.layout.W,
        )
        self.table.scroll_to_index(self.controller.cursor)

    def _read_keys(self):
        """Block briefly for one key, then drain whatever else is queued.

        A burst of scroll keys is handled as one batch so the visible range is
        computed once for the final offset.
        """
        ch = self.stdscr.getch()
        if ch == -1:
            return []
        keys = [ch]
        self.stdscr.timeout(0)
        try:
            while True:
                ch = self.stdscr.getch()
                if ch == -1:
                    break
                keys.append(ch)
        finally:
            self.stdscr.timeout(100)
        return keys

    # ---------------- UI ----------------

    def redraw(self):
        self.frame = self.table.render()
        self.pane.draw(self.layout.table_win, self.frame, cursor_row=self.controller.cursor)

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        context = {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "state": self.frame.state.value,
            "file_path": self.file_path,
            "range_start": self.frame.visible_range.start,
            "range_end": self.frame.visible_range.end,
            "total_rows": self.frame.item_count,
            "cursor": self.controller.cursor,
            "selected": len(self.table.selection),
            "faults": len(self.frame.faults),
        }
        try:
            sw.addnstr(0, 0, render_status(context, w), w)
        except curses.error:
            pass
        sw.refresh()

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.loader.start()
        self.redraw()

        try:
            while True:
                self._poll_loader()
                for ch in self._read_keys():
                    if ch == curses.KEY_RESIZE:
                        self._resize()
                    elif not self.controller.handle_key(ch):
                        return
                self.redraw()
        finally:
            self.loader.abort()
            self.table.close()
