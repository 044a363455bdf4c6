import curses

from display_state import DisplayState
from row_renderer import header_line, row_line


class TablePane:
    PAIR_SELECTED = 1
    PAIR_ERROR = 2
    PAIR_HEADER = 3
    PAIR_CELL_TEXT = 4

    STYLE_ATTRS = {
        "bold": curses.A_BOLD,
        "dim": curses.A_DIM,
        "underline": curses.A_UNDERLINE,
        "reverse": curses.A_REVERSE,
        "standout": curses.A_STANDOUT,
    }

    def __init__(self):
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_SELECTED, curses.COLOR_BLACK, curses.COLOR_CYAN)
            curses.init_pair(self.PAIR_ERROR, curses.COLOR_RED, -1)
            curses.init_pair(self.PAIR_HEADER, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
        except curses.error:
            pass

    @staticmethod
    def _pair(n):
        try:
            return curses.color_pair(n)
        except curses.error:
            return 0

    @staticmethod
    def _put(win, y, x, text, width, attr=0):
        if width <= 0:
            return
        try:
            win.addnstr(y, x, text, width, attr)
        except curses.error:
            pass

    def row_attr(self, row, cursor_row=None):
        attr = self._pair(self.PAIR_CELL_TEXT)
        if row.style == "skeleton":
            attr |= curses.A_DIM
        elif row.style == "error":
            attr = self._pair(self.PAIR_ERROR) | curses.A_BOLD
        elif row.style:
            attr |= self.STYLE_ATTRS.get(row.style, 0)
        if row.selected:
            attr = self._pair(self.PAIR_SELECTED) | (attr & ~curses.A_COLOR)
        if cursor_row is not None and row.index == cursor_row and not row.placeholder:
            attr |= curses.A_REVERSE
        return attr

    def draw(self, win, frame, cursor_row=None):
        """Paint one TableFrame; line 0 is the header, the body starts at line 1."""
        win.erase()
        h, w = win.getmaxyx()

        header_attr = self._pair(self.PAIR_HEADER) | curses.A_BOLD
        self._put(win, 0, 0, header_line(frame.header, frame.layout).ljust(w), w, header_attr)

        body_top = 1
        body_h = max(0, h - body_top)

        if frame.state is DisplayState.EMPTY:
            msg = frame.message or ""
            y = body_top + body_h // 2
            x = max(0, (w - len(msg)) // 2)
            self._put(win, y, x, msg, w - x, curses.A_DIM)
            win.refresh()
            return

        ih = frame.item_height
        for pos, row in enumerate(frame.rows):
            if frame.state is DisplayState.LOADING:
                top = pos * ih
            else:
                top = int(row.index * ih - frame.scroll_offset)
            text = row_line(row, frame.layout, frame.selectable)
            attr = self.row_attr(row, cursor_row)
            for line in range(ih):
                y = body_top + top + line
                if y < body_top or y >= h:
                    continue
                self._put(win, y, 0, (text if line == 0 else "").ljust(w), w, attr)

        win.refresh()
