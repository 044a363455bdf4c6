import curses
import logging
import os
import sys

import config_paths
from data_loader import LoadState
from file_type_handler import FileTypeHandler, UnsupportedFileType
from sample_data import SampleFrameInitializer

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

try:
    from _version import __version__
except Exception:
    __version__ = "0.0.0"


USAGE = (
    "vgrid - terminal viewer for large tables\n\n"
    "Usage:\n  vgrid [path]\n  vgrid -v\n  vgrid -h\n\n"
    "Keys:\n"
    "  j/k, arrows     move\n"
    "  Ctrl-D/Ctrl-U   half page down/up\n"
    "  PgDn/PgUp       page down/up\n"
    "  g/G             first/last row\n"
    "  space           toggle row selection\n"
    "  a               toggle all rows\n"
    "  c               clear selection\n"
    "  r               drop selections of rows that no longer exist\n"
    "  Enter           show row\n"
    "  q, Ctrl-X       quit\n"
)


def _configure_logging(cfg):
    try:
        config_paths.ensure_config_dirs()
    except OSError:
        logging.basicConfig(level=logging.CRITICAL)
        return
    logging.basicConfig(
        filename=config_paths.LOG_PATH,
        level=getattr(logging, cfg.get("LOG_LEVEL", "WARNING")),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    args = sys.argv[1:]

    if "-v" in args or "-V" in args:
        print(__version__)
        return

    if "-h" in args or "--help" in args:
        print(USAGE)
        return

    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    path = args[0] if args else None
    try:
        handler = FileTypeHandler(path) if path else None
    except UnsupportedFileType as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    if path and not os.path.exists(path):
        print(f"No such file: {path}", file=sys.stderr)
        sys.exit(1)

    cfg = config_paths.load_config()
    _configure_logging(cfg)

    load_state = LoadState()

    def load_df():
        if handler:
            return handler.load()
        return SampleFrameInitializer().create()

    def curses_main(stdscr):
        from orchestrator import Orchestrator

        Orchestrator(stdscr, load_df, load_state, path, cfg).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
