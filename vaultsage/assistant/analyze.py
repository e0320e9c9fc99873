"""Keyword pattern analysis across the notes of a folder."""

import logging
import re
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import date
from pathlib import Path

from vaultsage.errors import ExternalServiceError, InvalidInputError
from vaultsage.llm import CompletionClient
from vaultsage.vault.reader import VaultFile, check_folder, extract_date, read_vault

from .prompts import INSIGHTS_PROMPT

logger = logging.getLogger(__name__)

MAX_SNIPPETS_PER_NOTE = 2
MAX_EXAMPLES = 5

# One half of the timeline must exceed the other by this factor to count as a trend
TREND_FACTOR = 1.5


@dataclass
class KeywordMatch:
    """A note mentioning the keyword."""

    note_title: str
    snippet: str
    date: str | None = None
    mentions: int = 0


@dataclass
class Timeline:
    first_mention: str | None = None
    last_mention: str | None = None
    peak_period: str | None = None
    trend: str | None = None


@dataclass
class PatternAnalysis:
    """How a keyword is used across a folder."""

    keyword: str
    folder_path: str
    total_mentions: int
    notes_with_keyword: int
    total_notes: int
    first_mention: str | None = None
    last_mention: str | None = None
    peak_period: str | None = None
    trend: str | None = None
    examples: list[KeywordMatch] = field(default_factory=list)
    ai_insights: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def find_matches(notes: list[VaultFile], keyword: str) -> list[KeywordMatch]:
    """Find notes mentioning a keyword (literal, case-insensitive)."""
    pattern = re.compile(re.escape(keyword), re.IGNORECASE)

    matches = []
    for note in sorted(notes, key=lambda n: n.path):
        mentions = len(pattern.findall(note.content))
        if not mentions:
            continue

        snippets = []
        for line in note.content.splitlines():
            if pattern.search(line):
                snippets.append(line.strip())
                if len(snippets) >= MAX_SNIPPETS_PER_NOTE:
                    break

        matches.append(
            KeywordMatch(
                note_title=note.title,
                snippet=" ... ".join(snippets),
                date=extract_date(note),
                mentions=mentions,
            )
        )

    return matches


def analyze_timeline(matches: list[KeywordMatch]) -> Timeline:
    """First/last mention, busiest month and trend over dated matches.

    The trend compares how many mentions fall in the earlier and the later
    half of the span between the first and the last date.
    """
    dates = sorted(m.date for m in matches if m.date)
    if not dates:
        return Timeline()

    months = Counter(d[:7] for d in dates)
    peak = max(sorted(months), key=lambda month: months[month])

    first = date.fromisoformat(dates[0]).toordinal()
    last = date.fromisoformat(dates[-1]).toordinal()

    trend = "Stable"
    if last > first:
        midpoint = (first + last) / 2
        earlier = sum(1 for d in dates if date.fromisoformat(d).toordinal() < midpoint)
        later = len(dates) - earlier
        if later > earlier * TREND_FACTOR:
            trend = "Increasing"
        elif earlier > later * TREND_FACTOR:
            trend = "Decreasing"

    return Timeline(
        first_mention=dates[0],
        last_mention=dates[-1],
        peak_period=peak,
        trend=trend,
    )


def get_insights(
    client: CompletionClient, keyword: str, matches: list[KeywordMatch], trend: str | None
) -> str:
    """Ask for a 3-sentence interpretation of the usage pattern."""
    snippets = "\n".join(
        f'[{m.date or "undated"}] {m.note_title}: "{m.snippet}"' for m in matches[:MAX_EXAMPLES]
    )
    prompt = INSIGHTS_PROMPT.format(
        keyword=keyword,
        match_count=len(matches),
        trend=trend or "Unknown",
        snippets=snippets,
    )
    return client.complete(prompt, temperature=0.5)


def analyze_pattern(
    folder_path: Path,
    keyword: str,
    client: CompletionClient,
    include_ai: bool = True,
) -> PatternAnalysis:
    """Analyze how a keyword is used in the notes directly inside a folder.

    Raises:
        NotFoundError: If the folder does not exist
        InvalidInputError: If the path is a file or the keyword is empty
        ExternalServiceError: If AI insights are requested and the completion fails
    """
    keyword = keyword.strip()
    if not keyword:
        raise InvalidInputError("Keyword must not be empty")

    folder = check_folder(folder_path)
    notes = read_vault(folder, max_depth=1)

    matches = find_matches(notes, keyword)
    timeline = analyze_timeline(matches)
    logger.debug(f"'{keyword}' found in {len(matches)}/{len(notes)} notes")

    insights = None
    if include_ai and matches:
        try:
            insights = get_insights(client, keyword, matches, timeline.trend)
        except ExternalServiceError as e:
            raise ExternalServiceError(f"Pattern analysis failed: {e}") from e

    return PatternAnalysis(
        keyword=keyword,
        folder_path=str(folder),
        total_mentions=sum(m.mentions for m in matches),
        notes_with_keyword=len(matches),
        total_notes=len(notes),
        first_mention=timeline.first_mention,
        last_mention=timeline.last_mention,
        peak_period=timeline.peak_period,
        trend=timeline.trend,
        examples=matches[:MAX_EXAMPLES],
        ai_insights=insights,
    )
