"""
Reading options for the generated document and their CSS class tokens.

The enum values keep their PascalCase spelling; css_class() turns them into
kebab-cased tokens such as "margin-x-narrow".
"""

from enum import Enum


class ReadingStyle(Enum):
    """Determines how the extracted article will be styled."""
    NEWSPAPER = "Newspaper"
    NOVEL = "Novel"
    EBOOK = "Ebook"
    TERMINAL = "Terminal"


class ReadingMargin(Enum):
    """Margin of the extracted article."""
    X_NARROW = "XNarrow"
    NARROW = "Narrow"
    MEDIUM = "Medium"
    WIDE = "Wide"
    X_WIDE = "XWide"


class ReadingSize(Enum):
    """Font size of the extracted article."""
    X_SMALL = "XSmall"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    X_LARGE = "XLarge"


DEFAULT_READING_STYLE = ReadingStyle.NEWSPAPER
DEFAULT_READING_MARGIN = ReadingMargin.WIDE
DEFAULT_READING_SIZE = ReadingSize.MEDIUM


def get_user_style_class(prefix: str, enum_str: str) -> str:
    """
    Build a CSS class from a prefix and a PascalCase name.

    Every upper-case letter after the first starts a new dash-separated word:
    ("margin", "XNarrow") -> "margin-x-narrow".
    """
    suffix = []
    upper_seen = False
    for ch in enum_str:
        if ch.isupper():
            if upper_seen:
                suffix.append("-")
            upper_seen = True
            suffix.append(ch.lower())
        else:
            suffix.append(ch)
    return f"{prefix}-{''.join(suffix)}".rstrip("-")


def reading_style_class(style: ReadingStyle) -> str:
    return get_user_style_class("style", style.value)


def reading_margin_class(margin: ReadingMargin) -> str:
    return get_user_style_class("margin", margin.value)


def reading_size_class(size: ReadingSize) -> str:
    return get_user_style_class("size", size.value)


def parse_reading_option(enum_cls, value: str):
    """Look up an option by value ("XNarrow") or member name ("X_NARROW"), ignoring case."""
    wanted = value.strip().lower()
    for member in enum_cls:
        if wanted in (member.value.lower(), member.name.lower()):
            return member
    raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}")
