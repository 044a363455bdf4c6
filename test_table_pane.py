import curses
import unittest

from column_layout import ColumnDefinition
from table_pane import TablePane
from virtualized_table import VirtualizedTable


class DummyWin:
    def __init__(self, h=6, w=40):
        self._h = h
        self._w = w
        self.lines = {}
        self.attrs = {}
        self.refreshed = 0

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        self.lines.clear()
        self.attrs.clear()

    def addnstr(self, y, x, text, n, attr=0):
        self.lines[y] = text[:n]
        self.attrs[y] = attr

    def refresh(self):
        self.refreshed += 1


def _table(n=20, item_height=1, **kwargs):
    columns = [
        ColumnDefinition("id", "ID", lambda item, i: f"row{item}", width=8),
        ColumnDefinition("val", "Value", lambda item, i: item * 10, width=6, align="right"),
    ]
    return VirtualizedTable(
        columns,
        data=list(range(n)),
        viewport_height=5 * item_height,
        item_height=item_height,
        total_width=40,
        **kwargs,
    )


class TablePaneDrawTests(unittest.TestCase):
    def setUp(self):
        self.pane = TablePane()

    def test_header_on_first_line_rows_below(self):
        win = DummyWin()
        self.pane.draw(win, _table().render())
        self.assertTrue(win.lines[0].startswith("ID"))
        self.assertTrue(win.lines[1].startswith("row0"))
        self.assertTrue(win.lines[5].startswith("row4"))
        self.assertEqual(win.refreshed, 1)

    def test_rows_follow_scroll_offset(self):
        table = _table()
        table.handle_scroll(3)
        win = DummyWin()
        self.pane.draw(win, table.render())
        self.assertTrue(win.lines[1].startswith("row3"))
        self.assertTrue(win.lines[0].startswith("ID"))

    def test_tall_rows_fill_their_lines(self):
        win = DummyWin(h=11)
        self.pane.draw(win, _table(item_height=2).render())
        self.assertTrue(win.lines[1].startswith("row0"))
        self.assertEqual(win.lines[2].strip(), "")
        self.assertTrue(win.lines[3].startswith("row1"))

    def test_selection_prefix_when_selectable(self):
        table = _table(selectable=True)
        table.toggle_row(1)
        win = DummyWin()
        self.pane.draw(win, table.render())
        self.assertTrue(win.lines[0].startswith("[-]"))
        self.assertTrue(win.lines[1].startswith("[ ] row0"))
        self.assertTrue(win.lines[2].startswith("[x] row1"))

    def test_empty_state_centres_message(self):
        win = DummyWin(h=7)
        self.pane.draw(win, _table(n=0, empty_message="Nothing here").render())
        body = {y: text for y, text in win.lines.items() if y > 0}
        self.assertEqual(list(body.values()), ["Nothing here"])
        self.assertEqual(list(body), [1 + 6 // 2])

    def test_loading_paints_skeleton_rows(self):
        win = DummyWin(h=10)
        self.pane.draw(win, _table(loading=True, skeleton_rows=3).render())
        self.assertEqual(sorted(win.lines), [0, 1, 2, 3])
        self.assertIn("░", win.lines[1])

    def test_cursor_row_is_reversed(self):
        win = DummyWin()
        self.pane.draw(win, _table().render(), cursor_row=2)
        self.assertTrue(win.attrs[3] & curses.A_REVERSE)
        self.assertFalse(win.attrs[2] & curses.A_REVERSE)

    def test_error_rows_are_bold(self):
        def broken(item, index):
            if index == 1:
                raise KeyError("val")
            return item

        table = VirtualizedTable(
            [ColumnDefinition("v", "V", broken)],
            data=list(range(5)),
            viewport_height=5,
            item_height=1,
            total_width=40,
        )
        win = DummyWin()
        with self.assertLogs("virtualized_table", level="WARNING"):
            frame = table.render()
        self.pane.draw(win, frame)
        self.assertTrue(win.attrs[2] & curses.A_BOLD)
        self.assertIn("<render error>", win.lines[2])


if __name__ == "__main__":
    unittest.main()
