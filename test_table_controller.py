import curses
import unittest

from column_layout import ColumnDefinition
from table_controller import KEY_CTRL_D, KEY_CTRL_U, KEY_CTRL_X, TableController
from virtualized_table import VirtualizedTable


def _controller(n=100, **kwargs):
    table = VirtualizedTable(
        [ColumnDefinition("v", "V", lambda item, i: item)],
        data=list(range(n)),
        viewport_height=10,
        item_height=1,
        total_width=40,
        selectable=True,
        **kwargs,
    )
    statuses = []
    controller = TableController(table, lambda msg, seconds=3: statuses.append(msg))
    return controller, statuses


class NavigationTests(unittest.TestCase):
    def test_down_and_up_keys(self):
        ctl, _ = _controller()
        ctl.handle_key(ord("j"))
        ctl.handle_key(curses.KEY_DOWN)
        self.assertEqual(ctl.cursor, 2)
        ctl.handle_key(ord("k"))
        self.assertEqual(ctl.cursor, 1)

    def test_cursor_is_clamped(self):
        ctl, _ = _controller(n=3)
        ctl.handle_key(curses.KEY_UP)
        self.assertEqual(ctl.cursor, 0)
        for _ in range(10):
            ctl.handle_key(ord("j"))
        self.assertEqual(ctl.cursor, 2)

    def test_jump_to_end_scrolls_row_into_view(self):
        ctl, _ = _controller()
        ctl.handle_key(ord("G"))
        self.assertEqual(ctl.cursor, 99)
        self.assertIn(99, ctl.table.render().visible_range)
        ctl.handle_key(curses.KEY_HOME)
        self.assertEqual(ctl.cursor, 0)
        self.assertEqual(ctl.table.scroll_offset, 0)

    def test_half_pages(self):
        ctl, _ = _controller()
        ctl.handle_key(KEY_CTRL_D)
        self.assertEqual(ctl.cursor, 5)
        self.assertEqual(ctl.table.scroll_offset, 5)
        ctl.handle_key(KEY_CTRL_U)
        self.assertEqual(ctl.cursor, 0)
        self.assertEqual(ctl.table.scroll_offset, 0)

    def test_full_page(self):
        ctl, _ = _controller()
        ctl.handle_key(curses.KEY_NPAGE)
        self.assertEqual(ctl.cursor, 10)
        self.assertIn(10, ctl.table.render().visible_range)

    def test_no_movement_while_loading(self):
        ctl, _ = _controller(loading=True)
        ctl.handle_key(ord("j"))
        self.assertEqual(ctl.cursor, 0)


class SelectionKeyTests(unittest.TestCase):
    def test_space_toggles_cursor_row(self):
        ctl, statuses = _controller()
        ctl.handle_key(ord("j"))
        ctl.handle_key(ord(" "))
        self.assertTrue(ctl.table.selection.is_selected(1))
        self.assertEqual(statuses[-1], "Row 1 selected")
        ctl.handle_key(ord(" "))
        self.assertEqual(statuses[-1], "Row 1 deselected")

    def test_toggle_all_then_clear(self):
        ctl, statuses = _controller()
        ctl.handle_key(ord("a"))
        self.assertEqual(len(ctl.table.selection), 100)
        self.assertEqual(statuses[-1], "Selected all 100 rows")
        ctl.handle_key(ord("a"))
        self.assertEqual(len(ctl.table.selection), 0)
        ctl.handle_key(ord("a"))
        ctl.handle_key(ord("c"))
        self.assertEqual(len(ctl.table.selection), 0)
        self.assertEqual(statuses[-1], "Selection cleared")

    def test_reconcile_reports_dropped_ids(self):
        ctl, statuses = _controller(n=10, row_key=lambda item, i: item)
        ctl.handle_key(ord("a"))
        ctl.table.set_data(list(range(7)))
        ctl.handle_key(ord("r"))
        self.assertEqual(statuses[-1], "Dropped 3 stale selections")
        ctl.handle_key(ord("r"))
        self.assertEqual(statuses[-1], "Selection is up to date")


class KeyDispatchTests(unittest.TestCase):
    def test_quit_keys(self):
        ctl, _ = _controller()
        self.assertFalse(ctl.handle_key(ord("q")))
        self.assertFalse(ctl.handle_key(KEY_CTRL_X))
        self.assertTrue(ctl.handle_key(ord("z")))

    def test_enter_clicks_cursor_row(self):
        clicks = []
        ctl, _ = _controller(on_row_click=lambda item, i: clicks.append(i))
        ctl.handle_key(ord("j"))
        ctl.handle_key(10)
        self.assertEqual(clicks, [1])

    def test_enter_on_empty_table_does_nothing(self):
        clicks = []
        ctl, _ = _controller(n=0, on_row_click=lambda item, i: clicks.append(i))
        ctl.handle_key(curses.KEY_ENTER)
        self.assertEqual(clicks, [])


if __name__ == "__main__":
    unittest.main()
