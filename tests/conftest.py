"""Shared test fixtures."""

import os
import time
from pathlib import Path

import pytest

from vaultsage.errors import ExternalServiceError

DAY = 24 * 60 * 60


def write_note(path: Path, content: str, age_days: float = 0.0) -> Path:
    """Write a note and set its modification time age_days in the past."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    mtime = time.time() - age_days * DAY
    os.utime(path, (mtime, mtime))
    return path


class FakeClient:
    """Stands in for CompletionClient; records prompts and replays answers."""

    def __init__(self, replies: list[str] | None = None, default: str = "OK", fail: bool = False):
        self.replies = list(replies or [])
        self.default = default
        self.fail = fail
        self.prompts: list[str] = []

    def complete(self, prompt: str, **kwargs) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise ExternalServiceError("service unavailable")
        if self.replies:
            return self.replies.pop(0)
        return self.default

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def tmp_vault(tmp_path: Path) -> Path:
    """Create a temporary vault directory with sample notes."""
    vault = tmp_path / "vault"
    vault.mkdir()

    write_note(vault / "Inbox Note.md", "# Inbox\n\nLoose thought about gardening.", age_days=2)

    journal = vault / "JOURNAL"
    write_note(journal / "2025-01-05.md", "Felt some isolation today.", age_days=300)
    write_note(journal / "2025-02-10.md", "Working from home, isolation again.", age_days=270)
    write_note(journal / "2025-03-01.md", "Isolation is fading with new friends.", age_days=250)

    projects = vault / "PROJECTS"
    write_note(
        projects / "Garden Plan.md",
        "# Garden Plan\n\nGoal: grow tomatoes. See [[Seeds]] and [[Soil]].",
        age_days=10,
    )
    write_note(projects / "Archive" / "Old Website.md", "Notes on the old website.", age_days=400)

    # Hidden app folder must be ignored
    write_note(vault / ".obsidian" / "workspace.md", "hidden")

    return vault


@pytest.fixture
def sample_note_content() -> str:
    """Sample note content for testing."""
    return """---
title: Test Note
date: 2024-06-01
tags: [test, sample]
---

# Test Note

This is a test note with some content about my career goals.
"""
