"""
utils/text.py
-------------
Small text helpers: command parsing and markup stripping.
"""

import html
import re

_TAG_RE = re.compile(r"<[^>]+>")
_MARKDOWN_RULES = [
    (re.compile(r"\[(.+?)\]\(.+?\)"), r"\1"),  # links
    (re.compile(r"\*(.+?)\*"), r"\1"),
    (re.compile(r"(?<!\w)_(.+?)_(?!\w)"), r"\1"),
    (re.compile(r"`(.+?)`"), r"\1"),
    (re.compile(r"\\(.)"), r"\1"),  # escapes
]


def parse_command(text: str) -> tuple[str, list[str]]:
    """
    Split '/Name arg1 arg2' into ('name', ['arg1', 'arg2']).

    The leading slash is optional, the name is lower-cased and a
    '@BotName' suffix (group chats) is dropped.
    Returns ('', []) for blank text.
    """
    parts = text.strip().split()
    if not parts:
        return "", []
    name = parts[0].lstrip("/").split("@", 1)[0].lower()
    return name, parts[1:]


def is_command(text: str) -> bool:
    return text.strip().startswith("/")


def strip_formatting(text: str) -> str:
    """Remove Markdown markers and HTML tags so the text can be sent as plain text."""
    plain = text or ""
    for pattern, replacement in _MARKDOWN_RULES:
        plain = pattern.sub(replacement, plain)
    return html.unescape(_TAG_RE.sub("", plain))


def escape_html(text: str) -> str:
    """Escape user/DB-provided text for Telegram's HTML parse mode."""
    return html.escape(text or "", quote=False)


def escape_attr(text: str) -> str:
    """Escape a value placed inside a double-quoted HTML attribute (e.g. href)."""
    return html.escape(text or "", quote=True)
