"""Categorize a single note."""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from vaultsage.errors import ExternalServiceError, InvalidInputError, NotFoundError
from vaultsage.llm import CompletionClient
from vaultsage.vault.categories import VaultCategory
from vaultsage.vault.reader import MARKDOWN_SUFFIX

from .parsing import clean_text, match_category
from .prompts import CATEGORIZE_PROMPT, DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

# Maximum note length sent for categorization (chars)
MAX_CONTENT_LENGTH = 8000


@dataclass
class NoteCategory:
    """Category chosen for a note."""

    note_path: str
    title: str
    category: str
    known: bool  # False when the reply named none of the offered categories

    def to_dict(self) -> dict:
        return asdict(self)


def _category_lines(categories: list[VaultCategory] | None) -> tuple[list[str], str]:
    if categories:
        names = [c.name for c in categories]
        lines = [
            f"- {c.name} ({c.description})" if c.description else f"- {c.name}"
            for c in categories
        ]
    else:
        names = list(DEFAULT_CATEGORIES)
        lines = [f"- {name} ({hint})" for name, hint in DEFAULT_CATEGORIES.items()]
    return names, "\n".join(lines)


def categorize_note(
    note_path: Path,
    client: CompletionClient,
    categories: list[VaultCategory] | None = None,
) -> NoteCategory:
    """Pick the best category for a note.

    Args:
        note_path: Path to a markdown note
        client: Text-completion client
        categories: Vault categories to choose from (defaults to DEFAULT_CATEGORIES)

    Raises:
        NotFoundError: If the note does not exist
        InvalidInputError: If the path is not a markdown file
        ExternalServiceError: If the completion fails
    """
    note_path = Path(note_path).expanduser()
    if not note_path.exists():
        raise NotFoundError(f"Note not found: {note_path}")
    if not note_path.is_file() or note_path.suffix != MARKDOWN_SUFFIX:
        raise InvalidInputError(f"Must be a markdown (.md) file: {note_path}")

    try:
        content = note_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInputError(f"Cannot read note {note_path}: {e}") from e
    if len(content) > MAX_CONTENT_LENGTH:
        content = content[:MAX_CONTENT_LENGTH] + "\n\n[content truncated...]"

    names, category_text = _category_lines(categories)
    prompt = CATEGORIZE_PROMPT.format(categories=category_text, content=content)

    try:
        reply = client.complete(prompt, temperature=0.0, max_tokens=20)
    except ExternalServiceError as e:
        raise ExternalServiceError(f"Categorization failed: {e}") from e

    category = match_category(reply, names)
    known = category is not None
    if not known:
        lines = reply.strip().splitlines()
        category = clean_text(lines[0]) if lines else "UNCATEGORIZED"
        logger.warning(f"Model replied with an unknown category: {category!r}")

    return NoteCategory(
        note_path=str(note_path),
        title=note_path.stem,
        category=category or "UNCATEGORIZED",
        known=known,
    )
