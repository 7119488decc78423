"""
Display modes and output kinds understood by the tide engine.
"""

from __future__ import annotations

from enum import Enum


class DisplayMode(str, Enum):
    """Output styles the engine can produce.

    Values are the engine's single-letter ``-m`` codes.
    """

    ABOUT_LOCATION = "a"
    BANNER = "b"
    CALENDAR = "c"
    CALENDAR_ALTERNATIVE = "C"
    GRAPH = "g"
    MEDIUM_RARE = "m"
    PLAIN_TIMES = "p"
    RAW_TIMES = "r"
    STATISTICS = "s"

    @property
    def code(self) -> str:
        """Engine flag character."""
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, text: str) -> DisplayMode:
        """Look up a mode by flag character or name.

        Accepts ``"g"``, ``"graph"``, ``"GRAPH"``, ``"medium-rare"``, short names
        such as ``"plain"`` and so on.
        Flag characters are case-sensitive (``c`` vs ``C``), names are not.

        Raises:
            ValueError: If nothing matches
        """
        for mode in cls:
            if text == mode.value:
                return mode
        key = text.strip().upper().replace("-", "_").replace(" ", "_")
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Invalid display mode: {text}") from None


_LABELS = {
    DisplayMode.ABOUT_LOCATION: "About",
    DisplayMode.BANNER: "Banner",
    DisplayMode.CALENDAR: "Calendar",
    DisplayMode.CALENDAR_ALTERNATIVE: "Calendar (alt)",
    DisplayMode.GRAPH: "Graph",
    DisplayMode.MEDIUM_RARE: "Medium rare",
    DisplayMode.PLAIN_TIMES: "Plain",
    DisplayMode.RAW_TIMES: "Raw",
    DisplayMode.STATISTICS: "Statistics",
}

# Short names accepted by parse()
_ALIASES = {
    "ABOUT": DisplayMode.ABOUT_LOCATION,
    "ALT": DisplayMode.CALENDAR_ALTERNATIVE,
    "CALENDAR_ALT": DisplayMode.CALENDAR_ALTERNATIVE,
    "MEDIUM": DisplayMode.MEDIUM_RARE,
    "PLAIN": DisplayMode.PLAIN_TIMES,
    "RAW": DisplayMode.RAW_TIMES,
    "STATS": DisplayMode.STATISTICS,
}


class OutputKind(str, Enum):
    """Form of engine output."""

    TEXT = "text"
    IMAGE = "image"

    @property
    def flag(self) -> str:
        """Engine format flag."""
        return "-ft" if self is OutputKind.TEXT else "-fp"
