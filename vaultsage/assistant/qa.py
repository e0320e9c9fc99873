"""Answer free-text questions about a vault."""

import logging
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path

from vaultsage.errors import EmptyResultError, ExternalServiceError, InvalidInputError
from vaultsage.llm import CompletionClient
from vaultsage.vault.reader import VaultFile, read_vault
from vaultsage.vault.scoring import DEFAULT_FALLBACK_NOTES, DEFAULT_MAX_NOTES, select_context

from .prompts import QA_PROMPT

logger = logging.getLogger(__name__)

# Characters of each note included in the context
NOTE_CONTEXT_CHARS = 2000


@dataclass
class QAResult:
    """Answer to a question with the notes it was based on."""

    question: str
    answer: str
    sources_used: int
    context_size_tokens: int
    sources: list[str] = field(default_factory=list)
    used_fallback: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def build_context(notes: list[VaultFile]) -> str:
    """Concatenate notes into a prompt context, each truncated."""
    parts = ["Here are the relevant notes from the vault:\n"]
    for i, note in enumerate(notes, start=1):
        parts.append(f"--- Note {i}: {note.title} ---")
        parts.append(note.content[:NOTE_CONTEXT_CHARS])
        parts.append("")
    return "\n".join(parts)


def estimate_tokens(text: str) -> int:
    """Rough token estimate (4 chars per token)."""
    return math.ceil(len(text) / 4)


def answer_question(
    question: str,
    vault_path: Path,
    client: CompletionClient,
    max_notes: int = DEFAULT_MAX_NOTES,
    fallback_notes: int = DEFAULT_FALLBACK_NOTES,
) -> QAResult:
    """Answer a question using the most relevant notes of a vault.

    When no note matches any keyword of the question, the most recently
    modified notes are used instead.

    Raises:
        InvalidInputError: If the question is empty or the vault path is a file
        NotFoundError: If the vault does not exist
        EmptyResultError: If the vault has no markdown notes
        ExternalServiceError: If the completion fails
    """
    question = question.strip()
    if not question:
        raise InvalidInputError("Question must not be empty")

    logger.info("Reading vault files...")
    all_files = read_vault(vault_path)
    logger.info(f"  Found {len(all_files)} markdown files")

    if not all_files:
        raise EmptyResultError("No markdown files found in vault")

    # Newest first, so the fallback prefix is the most recent notes
    all_files.sort(key=lambda f: f.mtime, reverse=True)
    notes, used_fallback = select_context(question, all_files, max_notes, fallback_notes)
    if used_fallback:
        logger.info("  No keyword matches - using recent notes")
    else:
        logger.info(f"  Selected {len(notes)} relevant notes")

    context = build_context(notes)
    prompt = QA_PROMPT.format(context=context, question=question)

    try:
        answer = client.complete(prompt)
    except ExternalServiceError as e:
        raise ExternalServiceError(f"Q&A failed: {e}") from e

    return QAResult(
        question=question,
        answer=answer,
        sources_used=len(notes),
        context_size_tokens=estimate_tokens(context),
        sources=[n.title for n in notes],
        used_fallback=used_fallback,
    )
