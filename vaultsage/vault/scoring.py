"""Keyword relevance scoring for selecting Q&A context."""

import re
from dataclasses import dataclass

from .reader import VaultFile

STOP_WORDS = frozenset(
    {"what", "when", "where", "which", "about", "this", "that", "with", "from", "have", "been"}
)

# Keywords of this length or shorter are ignored
MIN_KEYWORD_LENGTH = 3

TITLE_WEIGHT = 10

DEFAULT_MAX_NOTES = 20
DEFAULT_FALLBACK_NOTES = 10


@dataclass
class ScoredFile:
    """A note with its relevance score for one query."""

    file: VaultFile
    score: int


def extract_keywords(query: str) -> list[str]:
    """Split a question into lower-cased keywords, dropping short and stop words."""
    return [
        word
        for word in query.lower().split()
        if len(word) > MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    ]


def count_occurrences(keyword: str, text: str) -> int:
    """Case-insensitive count of a literal keyword in text."""
    return len(re.findall(re.escape(keyword), text, re.IGNORECASE))


def score_file(file: VaultFile, keywords: list[str]) -> int:
    """Title hits weigh TITLE_WEIGHT, each body occurrence weighs 1."""
    title = file.title.lower()
    content = file.content.lower()

    score = 0
    for keyword in keywords:
        if keyword in title:
            score += TITLE_WEIGHT
        score += count_occurrences(keyword, content)
    return score


def rank_files(
    query: str, files: list[VaultFile], max_notes: int = DEFAULT_MAX_NOTES
) -> list[ScoredFile]:
    """Score files against a query.

    Returns:
        Files with a positive score, highest first (ties keep input order),
        at most max_notes of them
    """
    keywords = extract_keywords(query)
    if not keywords:
        return []

    scored = [ScoredFile(file=f, score=score_file(f, keywords)) for f in files]
    scored = [s for s in scored if s.score > 0]
    scored.sort(key=lambda s: -s.score)
    return scored[:max_notes]


def fallback_notes(files: list[VaultFile], limit: int = DEFAULT_FALLBACK_NOTES) -> list[VaultFile]:
    """Prefix of the file list used when nothing matches the query."""
    return files[:limit]


def select_context(
    query: str,
    files: list[VaultFile],
    max_notes: int = DEFAULT_MAX_NOTES,
    fallback_limit: int = DEFAULT_FALLBACK_NOTES,
) -> tuple[list[VaultFile], bool]:
    """Pick the notes to send with a question.

    Returns:
        (selected notes, whether the fallback prefix was used)
    """
    ranked = rank_files(query, files, max_notes)
    if ranked:
        return [s.file for s in ranked], False
    return fallback_notes(files, fallback_limit), True
