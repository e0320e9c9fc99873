"""Tolerant parsers for free-text model replies.

The model is asked for a format but may not follow it exactly. These helpers
never raise: lines that do not fit the expected shape are dropped and the
caller gets whatever could be recovered (possibly nothing).
"""

import re

KEY_VALUE_LINE = re.compile(r"^(.+?):\s*(.+)$")
NUMBERED_LINE = re.compile(r"^\s*\d+[.)]\s*(.+)$")
BULLET_PREFIX = re.compile(r"^\s*(?:[-*•]|#+)\s*")
EMPHASIS = re.compile(r"(\*\*|__|`)")


def clean_text(text: str) -> str:
    """Strip bullets, headings and bold/code markers from a line."""
    # Emphasis first, "**Name**" must not lose its leading "*" as a bullet
    text = EMPHASIS.sub("", text)
    text = BULLET_PREFIX.sub("", text)
    return text.strip()


def parse_key_value_lines(text: str) -> dict[str, str]:
    """Parse "Key: value" lines. Later duplicates overwrite earlier ones."""
    result: dict[str, str] = {}
    for line in text.splitlines():
        line = clean_text(line)
        if not line:
            continue
        match = KEY_VALUE_LINE.match(line)
        if not match:
            continue
        key = match.group(1).strip()
        value = match.group(2).strip()
        if key and value:
            result[key] = value
    return result


def parse_numbered_list(text: str) -> list[str]:
    """Parse "1. item" or "1) item" lines into their item text."""
    items = []
    for line in text.splitlines():
        match = NUMBERED_LINE.match(line)
        if not match:
            continue
        item = clean_text(match.group(1))
        if item:
            items.append(item)
    return items


def _label_pattern(label: str) -> re.Pattern:
    return re.compile(rf"^[\s*_#-]*{re.escape(label)}[\s*_]*:[\s*_]*(.*)$", re.IGNORECASE)


def parse_labeled_list(text: str, label: str) -> list[str]:
    """Parse a "Label: a, b, c" line into its items. Empty if the line is missing."""
    pattern = _label_pattern(label)
    for line in text.splitlines():
        match = pattern.match(line)
        if match:
            parts = re.split(r"[,;]", match.group(1))
            return [p for p in (clean_text(part).rstrip(".") for part in parts) if p]
    return []


def strip_label_line(text: str, label: str) -> str:
    """Remove "Label: ..." lines from a reply."""
    pattern = _label_pattern(label)
    lines = [line for line in text.splitlines() if not pattern.match(line)]
    return "\n".join(lines).strip()


def match_category(reply: str, names: list[str]) -> str | None:
    """Find which of the offered category names a reply refers to.

    Tries the first line as an exact (case-insensitive) name, then the name
    mentioned earliest anywhere in the reply.
    """
    lookup = {name.lower(): name for name in names}

    first_line = clean_text(reply.strip().splitlines()[0]) if reply.strip() else ""
    first_line = first_line.strip(" .\"'")
    if first_line.lower() in lookup:
        return lookup[first_line.lower()]

    best: tuple[int, str] | None = None
    for name in names:
        match = re.search(rf"(?<!\w){re.escape(name)}(?!\w)", reply, re.IGNORECASE)
        if match and (best is None or match.start() < best[0]):
            best = (match.start(), name)
    return best[1] if best else None
