"""Fixed values shared across rgbridge.

Flag tokens follow ripgrep's command-line interface. The binary itself is
configurable (see rgbridge.config), the flags are not.
"""

APP_NAME = "rgbridge"

# Result cap. Parsing stops as soon as this many results are collected.
MAX_RESULTS = 10000

DEFAULT_BINARY = "rg"


class Flag:
    """ripgrep flag tokens, in the order they are emitted."""

    CASE_INSENSITIVE = "-i"
    WHOLE_WORD = "-w"
    REGEX = "--engine=auto"
    HIDDEN = "--hidden"
    MAX_DEPTH = "--max-depth={depth}"
    TYPE = "--type={name}"
    TYPE_NOT = "--type-not={name}"
    OUTPUT_FORMAT = "--vimgrep"


# Config / history layout ({$RGBRIDGE_HOME or ~/.config/rgbridge}/...)
CONFIG_DIR_NAME = ".config"
CONFIG_FILE_NAME = "config.yaml"
HISTORY_FILE_NAME = "search_history.json"
LOG_DIR_NAME = "logs"

MAX_HISTORY_COUNT = 100
MAX_HISTORY_DAYS = 30

# Seconds between SIGTERM and SIGKILL when cancelling a search
TERMINATE_GRACE = 3.0
