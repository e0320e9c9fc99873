"""Assistant core - ties settings, the completion client and the vault operations together."""

import logging
from pathlib import Path

from vaultsage.config import Settings
from vaultsage.errors import InvalidInputError
from vaultsage.llm import CompletionClient
from vaultsage.vault.categories import CategoryCache, VaultCategory

from .analyze import PatternAnalysis, analyze_pattern
from .categorize import NoteCategory, categorize_note
from .qa import QAResult, answer_question
from .report import VaultReport, generate_vault_report
from .summarize import FolderSummary, summarize_folder

logger = logging.getLogger(__name__)


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    CYAN = "\033[36m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    BLUE = "\033[34m"


class VaultAssistant:
    """AI assistant exposing the vault operations.

    Owns one CompletionClient and one CategoryCache; pass them in to share or
    to substitute fakes in tests.
    """

    def __init__(
        self,
        settings: Settings,
        client: CompletionClient | None = None,
        category_cache: CategoryCache | None = None,
    ) -> None:
        self.settings = settings
        self.client = client or CompletionClient(
            api_key=settings.openai_api_key, model=settings.openai_model
        )
        self.category_cache = category_cache or CategoryCache(
            self.client, ttl=settings.category_cache_ttl
        )

    def _vault(self, vault_path: Path | None) -> Path:
        """Explicit vault path, or the configured one."""
        if vault_path is not None:
            return Path(vault_path).expanduser()
        if self.settings.vault_path is None:
            raise InvalidInputError("No vault path given and VAULT_PATH is not set")
        return self.settings.vault_path

    def categories(self, vault_path: Path | None = None) -> list[VaultCategory]:
        """Vault categories with descriptions (cached)."""
        return self.category_cache.get_categories(self._vault(vault_path))

    def refresh_categories(self) -> None:
        """Drop cached categories so the next request rebuilds them."""
        self.category_cache.invalidate()

    def categorize(
        self, note_path: Path, vault_path: Path | None = None, use_vault_categories: bool = True
    ) -> NoteCategory:
        """Categorize a note, choosing among the vault's folders when a vault is known."""
        categories = None
        if use_vault_categories and (vault_path is not None or self.settings.vault_path):
            categories = self.categories(vault_path) or None
        return categorize_note(Path(note_path).expanduser(), self.client, categories)

    def summarize(self, folder_path: Path) -> FolderSummary:
        return summarize_folder(Path(folder_path).expanduser(), self.client)

    def analyze(self, folder_path: Path, keyword: str, include_ai: bool = True) -> PatternAnalysis:
        return analyze_pattern(Path(folder_path).expanduser(), keyword, self.client, include_ai)

    def ask(self, question: str, vault_path: Path | None = None) -> QAResult:
        return answer_question(
            question,
            self._vault(vault_path),
            self.client,
            max_notes=self.settings.max_context_notes,
        )

    def report(self, vault_path: Path | None = None) -> VaultReport:
        return generate_vault_report(self._vault(vault_path), self.client)
