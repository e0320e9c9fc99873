"""Vault access - reading notes, relevance scoring, sampling and categories."""

from .categories import CategoryCache, VaultCategory, discover_categories
from .reader import VaultFile, extract_date, read_vault, walk_markdown
from .sampling import importance_score, select_sample
from .scoring import ScoredFile, extract_keywords, rank_files, select_context

__all__ = [
    "CategoryCache",
    "ScoredFile",
    "VaultCategory",
    "VaultFile",
    "discover_categories",
    "extract_date",
    "extract_keywords",
    "importance_score",
    "rank_files",
    "read_vault",
    "select_context",
    "select_sample",
    "walk_markdown",
]
