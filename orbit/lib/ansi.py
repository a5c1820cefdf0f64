import re
from collections.abc import Callable
from dataclasses import dataclass

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Theme:
    red: str = "\033[38;5;203m"
    green: str = "\033[38;5;114m"
    yellow: str = "\033[38;5;221m"
    blue: str = "\033[38;5;111m"
    cyan: str = "\033[38;5;117m"
    gray: str = "\033[38;5;245m"
    orange: str = "\033[38;5;208m"
    purple: str = "\033[38;5;141m"
    muted: str = "\033[90m"  # dim gray for secondary text
    bold: str = "\033[1m"
    dim: str = "\033[2m"
    reset: str = "\033[0m"


DARK = Theme()
LIGHT = Theme(
    red="\033[38;5;160m",
    green="\033[38;5;28m",
    yellow="\033[38;5;136m",
    blue="\033[38;5;25m",
    cyan="\033[38;5;30m",
    gray="\033[38;5;242m",
    orange="\033[38;5;166m",
    purple="\033[38;5;55m",
    muted="\033[38;5;244m",
)
THEMES: dict[str, Theme] = {"dark": DARK, "light": LIGHT}
_active: Theme = DARK


def use(theme: Theme) -> None:
    global _active
    _active = theme


def use_named(name: str) -> None:
    use(THEMES.get(name, DARK))


_COLORS = {
    "red",
    "green",
    "yellow",
    "blue",
    "cyan",
    "gray",
    "orange",
    "purple",
    "muted",
}

CATEGORY_COLORS: dict[str, str] = {
    "health": "green",
    "productivity": "blue",
    "learning": "yellow",
    "mindfulness": "purple",
    "other": "gray",
}


def __getattr__(name: str) -> Callable[[str], str]:
    if name in _COLORS:

        def _wrap(text: str) -> str:
            return f"{getattr(_active, name)}{text}{_active.reset}"

        _wrap.__name__ = name
        return _wrap
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def color(name: str, text: str) -> str:
    code = getattr(_active, name, "") if name in _COLORS else ""
    return f"{code}{text}{_active.reset}" if code else text


def bold(text: str) -> str:
    return f"{_active.bold}{text}{_active.reset}"


def dim(text: str) -> str:
    return f"{_active.dim}{text}{_active.reset}"


def strip(text: str) -> str:
    return _ANSI_RE.sub("", text)
