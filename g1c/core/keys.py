"""Key names understood by the dashboard core.

Front ends translate their native key events into these names. Printable
characters are passed through as themselves.
"""

QUIT = "q"
INTERRUPT = "ctrl+c"
HELP = "?"
UP = "up"
DOWN = "down"
VIM_UP = "k"
VIM_DOWN = "j"
ENTER = "enter"
ESCAPE = "escape"
BACKSPACE = "backspace"
REFRESH = "r"
START = "s"
STOP = "S"
RESTART = "R"
FILTER = "f"
SEARCH = "/"

PREVIOUS_KEYS = frozenset({UP, VIM_UP})
NEXT_KEYS = frozenset({DOWN, VIM_DOWN})
QUIT_KEYS = frozenset({QUIT, INTERRUPT})


def is_printable(key: str) -> bool:
    """Return True for single printable characters."""
    return len(key) == 1 and key.isprintable()
