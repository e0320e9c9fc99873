"""Summarize the notes of one folder."""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from vaultsage.errors import EmptyResultError, ExternalServiceError
from vaultsage.llm import CompletionClient
from vaultsage.vault.reader import check_folder, read_vault
from vaultsage.vault.sampling import select_sample

from .parsing import parse_labeled_list, strip_label_line
from .prompts import SUMMARIZE_PROMPT

logger = logging.getLogger(__name__)

# Notes sent in full before sampling kicks in
DEFAULT_MAX_NOTES = 30


@dataclass
class FolderSummary:
    """Narrative summary of a folder."""

    folder_path: str
    note_count: int
    sampled_count: int
    summary: str
    themes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def summarize_folder(
    folder_path: Path, client: CompletionClient, max_notes: int = DEFAULT_MAX_NOTES
) -> FolderSummary:
    """Generate a ~200-word summary of the notes directly inside a folder.

    Subfolders are not read. Large folders are reduced to a representative
    sample of max_notes notes.

    Raises:
        NotFoundError: If the folder does not exist
        InvalidInputError: If the path is a file
        EmptyResultError: If the folder has no markdown notes
        ExternalServiceError: If the completion fails
    """
    folder = check_folder(folder_path)
    notes = read_vault(folder, max_depth=1)
    if not notes:
        raise EmptyResultError(f"No markdown files found in {folder}")

    sample = select_sample(notes, max_notes)
    sample = sorted(sample, key=lambda n: n.title)

    sample_note = ""
    if len(sample) < len(notes):
        sample_note = f" A representative sample of {len(sample)} notes is shown."
        logger.info(f"Sampled {len(sample)} of {len(notes)} notes")

    note_text = "\n".join(f"--- {note.title} ---\n{note.content}\n" for note in sample)
    prompt = SUMMARIZE_PROMPT.format(
        note_count=len(notes),
        folder_name=folder.name,
        sample_note=sample_note,
        notes=note_text,
    )

    try:
        reply = client.complete(prompt)
    except ExternalServiceError as e:
        raise ExternalServiceError(f"Summarization failed: {e}") from e

    return FolderSummary(
        folder_path=str(folder),
        note_count=len(notes),
        sampled_count=len(sample),
        summary=strip_label_line(reply, "Themes"),
        themes=parse_labeled_list(reply, "Themes"),
    )
