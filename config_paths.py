import json
import logging
import os

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "vgrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "vgrid.log")

# default settings
ITEM_HEIGHT_DEFAULT = 1
OVERSCAN_DEFAULT = 0
SKELETON_ROWS_DEFAULT = 5
EMPTY_MESSAGE_DEFAULT = "No data available"
MIN_COL_WIDTH_DEFAULT = 4
FIT_CONTENT_DEFAULT = True
LOG_LEVEL_DEFAULT = "WARNING"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# json key -> (config key, minimum) for the integer settings
_INT_SETTINGS = {
    "item_height": ("ITEM_HEIGHT", 1),
    "overscan": ("OVERSCAN", 0),
    "skeleton_rows": ("SKELETON_ROWS", 0),
    "min_col_width": ("MIN_COL_WIDTH", 1),
}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    cfg = {
        "ITEM_HEIGHT": ITEM_HEIGHT_DEFAULT,
        "OVERSCAN": OVERSCAN_DEFAULT,
        "SKELETON_ROWS": SKELETON_ROWS_DEFAULT,
        "EMPTY_MESSAGE": EMPTY_MESSAGE_DEFAULT,
        "MIN_COL_WIDTH": MIN_COL_WIDTH_DEFAULT,
        "FIT_CONTENT": FIT_CONTENT_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    for name, (key, minimum) in _INT_SETTINGS.items():
        value = data.get(name)
        if isinstance(value, int) and not isinstance(value, bool) and value >= minimum:
            cfg[key] = value

    msg = data.get("empty_message")
    if isinstance(msg, str):
        cfg["EMPTY_MESSAGE"] = msg

    fit = data.get("fit_content")
    if isinstance(fit, bool):
        cfg["FIT_CONTENT"] = fit

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
