import curses

from display_state import DisplayState, display_state

KEY_CTRL_C = 3
KEY_CTRL_D = 4
KEY_CTRL_U = 21
KEY_CTRL_X = 24
QUIT_KEYS = (ord("q"), KEY_CTRL_C, KEY_CTRL_X)
ENTER_KEYS = (10, 13, curses.KEY_ENTER)


class TableController:
    """Maps key presses to cursor movement and table interactions."""

    def __init__(self, table, set_status):
        self.table = table
        self._set_status = set_status
        self.cursor = 0

    def _populated(self):
        return (
            display_state(self.table.loading, self.table.item_count)
            is DisplayState.POPULATED
        )

    def clamp_cursor(self):
        last = max(0, self.table.item_count - 1)
        self.cursor = min(max(0, self.cursor), last)

    # ---------- navigation ----------
    def move_to(self, row):
        if not self._populated():
            return
        self.cursor = row
        self.clamp_cursor()
        self.table.scroll_to_index(self.cursor)

    def move(self, delta):
        self.move_to(self.cursor + delta)

    def page(self, fraction):
        step = max(1, int(self.table.page_size * abs(fraction)))
        direction = 1 if fraction > 0 else -1
        self.table.scroll_by(direction * step * self.table.item_height)
        self.move(direction * step)

    # ---------- selection ----------
    def toggle_cursor_row(self):
        if not self._populated():
            return
        selected = self.table.toggle_row(self.cursor)
        self._set_status(f"Row {self.cursor} {'selected' if selected else 'deselected'}", 2)

    def toggle_all(self):
        if not self._populated():
            return
        if self.table.toggle_all():
            self._set_status(f"Selected all {self.table.item_count} rows", 2)
        else:
            self._set_status("Selection cleared", 2)

    def clear_selection(self):
        self.table.clear_selection()
        self._set_status("Selection cleared", 2)

    def reconcile(self):
        dropped = self.table.reconcile_selection()
        if dropped:
            self._set_status(f"Dropped {len(dropped)} stale selections", 3)
        else:
            self._set_status("Selection is up to date", 2)

    def click(self):
        if self._populated():
            self.table.click_row(self.cursor)

    # ---------- keys ----------
    def handle_key(self, ch) -> bool:
        """Returns False when the viewer should exit."""
        if ch in QUIT_KEYS:
            return False
        if ch in (curses.KEY_DOWN, ord("j")):
            self.move(1)
        elif ch in (curses.KEY_UP, ord("k")):
            self.move(-1)
        elif ch == KEY_CTRL_D:
            self.page(0.5)
        elif ch == KEY_CTRL_U:
            self.page(-0.5)
        elif ch == curses.KEY_NPAGE:
            self.page(1)
        elif ch == curses.KEY_PPAGE:
            self.page(-1)
        elif ch in (ord("g"), curses.KEY_HOME):
            self.move_to(0)
        elif ch in (ord("G"), curses.KEY_END):
            self.move_to(self.table.item_count - 1)
        elif ch == ord(" "):
            self.toggle_cursor_row()
        elif ch == ord("a"):
            self.toggle_all()
        elif ch == ord("c"):
            self.clear_selection()
        elif ch == ord("r"):
            self.reconcile()
        elif ch in ENTER_KEYS:
            self.click()
        return True
