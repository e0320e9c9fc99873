"""Vault-wide report with statistics and AI summaries."""

import logging
import math
from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from vaultsage.errors import EmptyResultError, ExternalServiceError
from vaultsage.llm import CompletionClient
from vaultsage.vault.reader import ROOT_FOLDER, VaultFile, read_vault
from vaultsage.vault.sampling import select_sample

from .parsing import parse_key_value_lines, parse_numbered_list
from .prompts import FOLDER_SUMMARIES_PROMPT, THEMES_PROMPT

logger = logging.getLogger(__name__)

MAX_NOTES_PER_FOLDER = 15
THEME_SAMPLE_SIZE = 50
NOTE_SAMPLE_CHARS = 1000
MAX_MONTHS = 12

SMALL_FOLDER_NOTES = 3
LARGE_FOLDER_NOTES = 100


@dataclass
class FolderStats:
    name: str
    note_count: int
    percentage: int


@dataclass
class MonthlyActivity:
    month: str
    note_count: int


@dataclass
class VaultReport:
    """Structured overview of a whole vault."""

    generated_at: datetime
    total_notes: int
    total_folders: int
    folder_breakdown: list[FolderStats] = field(default_factory=list)
    monthly_activity: list[MonthlyActivity] = field(default_factory=list)
    folder_summaries: dict[str, str] = field(default_factory=dict)
    top_themes: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["generated_at"] = self.generated_at.isoformat()
        return data


def group_by_folder(files: list[VaultFile]) -> dict[str, list[VaultFile]]:
    """Group notes by top-level folder, largest group first."""
    groups: dict[str, list[VaultFile]] = {}
    for file in sorted(files, key=lambda f: f.path):
        groups.setdefault(file.top_folder, []).append(file)
    return dict(sorted(groups.items(), key=lambda item: -len(item[1])))


def calculate_folder_stats(files: list[VaultFile]) -> list[FolderStats]:
    """Note count and share per top-level folder, largest first."""
    counts = Counter(f.top_folder for f in files)
    total = len(files)
    stats = [
        FolderStats(name=name, note_count=count, percentage=math.floor(count * 100 / total + 0.5))
        for name, count in counts.items()
    ]
    return sorted(stats, key=lambda s: (-s.note_count, s.name))


def calculate_monthly_activity(files: list[VaultFile]) -> list[MonthlyActivity]:
    """Notes per modification month (UTC), newest MAX_MONTHS months first."""
    counts = Counter(f.modified.strftime("%Y-%m") for f in files)
    activity = [MonthlyActivity(month=m, note_count=c) for m, c in counts.items()]
    activity.sort(key=lambda a: a.month, reverse=True)
    return activity[:MAX_MONTHS]


def generate_suggestions(files: list[VaultFile], stats: list[FolderStats]) -> list[str]:
    """Organization hints based on folder sizes."""
    suggestions = []

    root_notes = [f for f in files if f.folder == ROOT_FOLDER]
    if root_notes:
        suggestions.append(
            f"{len(root_notes)} notes in root directory - consider organizing into folders"
        )

    small = [s for s in stats if s.note_count < SMALL_FOLDER_NOTES and s.name != ROOT_FOLDER]
    if small:
        suggestions.append(
            f"{len(small)} folders with less than {SMALL_FOLDER_NOTES} notes - consider consolidating"
        )

    for s in stats:
        if s.note_count > LARGE_FOLDER_NOTES:
            suggestions.append(f"{s.name} has {s.note_count} notes - consider creating subfolders")

    return suggestions


def generate_folder_summaries(
    client: CompletionClient,
    groups: dict[str, list[VaultFile]],
    max_notes_per_folder: int = MAX_NOTES_PER_FOLDER,
) -> dict[str, str]:
    """One prompt over a sample of every folder, parsed into folder -> summary."""
    parts = ["Here are representative notes from each folder in the vault:\n"]
    for name, files in groups.items():
        sample = select_sample(files, max_notes_per_folder)
        parts.append(f"=== {name} ({len(files)} total notes, {len(sample)} sampled) ===\n")
        for file in sample:
            parts.append(f"--- {file.title} ---\n{file.content[:NOTE_SAMPLE_CHARS]}\n")

    logger.info("Generating AI summaries for folders...")
    reply = client.complete(FOLDER_SUMMARIES_PROMPT.format(context="\n".join(parts)))

    known = {name.lower(): name for name in groups}
    summaries = {}
    for key, summary in parse_key_value_lines(reply).items():
        name = known.get(key.strip().strip("=").strip().lower())
        if name:
            summaries[name] = summary
    return summaries


def generate_top_themes(
    client: CompletionClient, files: list[VaultFile], sample_size: int = THEME_SAMPLE_SIZE
) -> list[str]:
    """Overarching themes from a vault-wide sample."""
    sample = select_sample(sorted(files, key=lambda f: f.path), sample_size)

    parts = ["Here are representative notes from across the vault:\n"]
    for file in sample:
        parts.append(f"--- {file.title} ({file.folder}) ---\n{file.content[:NOTE_SAMPLE_CHARS]}\n")

    logger.info("Generating top themes...")
    reply = client.complete(THEMES_PROMPT.format(context="\n".join(parts)))
    return parse_numbered_list(reply)


def generate_vault_report(vault_path: Path, client: CompletionClient) -> VaultReport:
    """Build statistics, folder summaries, themes and suggestions for a vault.

    Raises:
        NotFoundError: If the vault does not exist
        InvalidInputError: If the vault path is a file
        EmptyResultError: If the vault has no markdown notes
        ExternalServiceError: If a completion fails
    """
    logger.info("Reading vault files...")
    files = read_vault(vault_path)
    logger.info(f"  Found {len(files)} markdown files")

    if not files:
        raise EmptyResultError("No markdown files found in vault")

    logger.info("Calculating statistics...")
    stats = calculate_folder_stats(files)
    activity = calculate_monthly_activity(files)
    groups = group_by_folder(files)

    try:
        folder_summaries = generate_folder_summaries(client, groups)
        top_themes = generate_top_themes(client, files)
    except ExternalServiceError as e:
        raise ExternalServiceError(f"Batch processing failed: {e}") from e

    return VaultReport(
        generated_at=datetime.now(UTC),
        total_notes=len(files),
        total_folders=len(groups),
        folder_breakdown=stats,
        monthly_activity=activity,
        folder_summaries=folder_summaries,
        top_themes=top_themes,
        suggestions=generate_suggestions(files, stats),
    )
