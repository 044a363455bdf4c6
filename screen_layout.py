import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: table (header line + body), status bar (1 line)
        self.status_h = 1
        self.table_h = max(2, self.H - self.status_h)

        self.table_win = curses.newwin(self.table_h, self.W, 0, 0)
        self.table_win.leaveok(True)

        self.status_win = curses.newwin(self.status_h, self.W, self.table_h, 0)
        self.status_win.leaveok(True)

    @property
    def body_h(self):
        # first table line is the header
        return self.table_h - 1
