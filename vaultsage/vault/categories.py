"""Vault categories - top-level folders with LLM-generated descriptions."""

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from vaultsage.errors import ExternalServiceError, NotFoundError
from vaultsage.llm import CompletionClient

from .reader import is_excluded_dir, walk_markdown

logger = logging.getLogger(__name__)

# One hour
DEFAULT_TTL = 60 * 60

# Folder depth searched for sample notes
SAMPLE_DEPTH = 3
MAX_SAMPLES = 3
SAMPLE_CHARS = 500

DESCRIBE_PROMPT = """\
You are analyzing a folder called "{name}" from an Obsidian vault.

Here are sample files from this folder:

{samples}

In ONE sentence (max 15 words), describe what this folder contains.

Examples:
- "Daily journal entries and personal reflections"
- "Career documents including resumes and job applications"
- "Financial tracking, budgets, and investment notes"

Description:"""


@dataclass
class VaultCategory:
    """A top-level vault folder treated as a category."""

    name: str
    path: Path
    description: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
        }


def discover_categories(vault_path: Path) -> list[VaultCategory]:
    """List top-level, non-hidden folders of a vault as categories."""
    vault_path = Path(vault_path)
    if not vault_path.exists():
        raise NotFoundError(f"Vault not found: {vault_path}")

    categories = []
    for item in sorted(vault_path.iterdir()):
        try:
            if item.is_dir() and not is_excluded_dir(item.name):
                categories.append(VaultCategory(name=item.name, path=item))
        except OSError as e:
            logger.warning(f"Skipping {item.name}: {e}")

    return categories


def sample_folder(folder: Path, rng: random.Random, max_samples: int = MAX_SAMPLES) -> list[str]:
    """Read the beginning of a few randomly chosen notes in a folder."""
    candidates = list(walk_markdown(folder, max_depth=SAMPLE_DEPTH))
    chosen = rng.sample(candidates, min(max_samples, len(candidates)))

    samples = []
    for path in chosen:
        try:
            samples.append(path.read_text(encoding="utf-8")[:SAMPLE_CHARS])
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
    return samples


def describe_category(client: CompletionClient, name: str, samples: list[str]) -> str:
    """Ask for a one-line description, falling back to a generic one."""
    fallback = f"{name} folder"
    if not samples:
        return fallback

    sample_text = "\n".join(
        f"--- Sample {i + 1} ---\n{sample}\n" for i, sample in enumerate(samples)
    )
    prompt = DESCRIBE_PROMPT.format(name=name, samples=sample_text)

    try:
        description = client.complete(prompt, max_tokens=60)
    except ExternalServiceError as e:
        logger.warning(f"Could not generate description for {name}: {e}")
        return fallback

    description = description.strip().strip('"').strip()
    return description or fallback


class CategoryCache:
    """Time-bounded cache of enriched vault categories.

    The list is rebuilt on the first read after the TTL has elapsed or after
    invalidate(); there is no background refresh. Concurrent rebuilds only
    repeat work, the stored list is always replaced as a whole.
    """

    def __init__(
        self,
        client: CompletionClient,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client
        self.ttl = ttl
        self.clock = clock
        self.rng = rng or random.Random()
        self._categories: list[VaultCategory] | None = None
        self._last_refresh: float | None = None
        self._vault_path: Path | None = None

    def get_categories(self, vault_path: Path) -> list[VaultCategory]:
        """Get categories from cache, or rebuild them if stale."""
        vault_path = Path(vault_path).resolve()
        if self.is_valid() and self._vault_path == vault_path:
            return self._categories

        logger.info(f"Discovering vault categories in {vault_path}...")
        categories = self._build(vault_path)

        self._categories = categories
        self._last_refresh = self.clock()
        self._vault_path = vault_path
        return categories

    def invalidate(self) -> None:
        """Force a rebuild on the next get_categories call."""
        self._categories = None
        self._last_refresh = None
        self._vault_path = None

    def is_valid(self) -> bool:
        """Whether a list is stored and younger than the TTL."""
        if self._categories is None or self._last_refresh is None:
            return False
        return (self.clock() - self._last_refresh) < self.ttl

    def _build(self, vault_path: Path) -> list[VaultCategory]:
        discovered = discover_categories(vault_path)
        logger.info(f"Analyzing {len(discovered)} categories...")

        enriched = []
        for category in discovered:
            samples = sample_folder(category.path, self.rng)
            logger.debug(f"  {category.name} ({len(samples)} samples)")
            enriched.append(
                VaultCategory(
                    name=category.name,
                    path=category.path,
                    description=describe_category(self.client, category.name, samples),
                )
            )

        return enriched
