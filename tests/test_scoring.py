"""Tests for relevance scoring."""

from pathlib import Path

from vaultsage.vault.reader import VaultFile
from vaultsage.vault.scoring import (
    extract_keywords,
    fallback_notes,
    rank_files,
    score_file,
    select_context,
)


def make_file(title: str, content: str, mtime: float = 0.0) -> VaultFile:
    return VaultFile(
        path=Path(f"/vault/{title}.md"),
        title=title,
        folder="Root",
        mtime=mtime,
        size=len(content),
        content=content,
    )


class TestExtractKeywords:
    """Tests for extract_keywords."""

    def test_drops_short_and_stop_words(self):
        keywords = extract_keywords("What were my main goals about running in November?")
        assert keywords == ["were", "main", "goals", "running", "november?"]

    def test_lowercases(self):
        assert extract_keywords("GARDEN Tomatoes") == ["garden", "tomatoes"]

    def test_only_stop_words(self):
        assert extract_keywords("what is this") == []


class TestScoreFile:
    """Tests for score_file."""

    def test_title_weighs_more(self):
        note = make_file("Garden Plan", "nothing relevant")
        assert score_file(note, ["garden"]) == 10

    def test_body_occurrences(self):
        note = make_file("Misc", "Garden here, garden there, GARDEN everywhere")
        assert score_file(note, ["garden"]) == 3

    def test_title_and_body(self):
        note = make_file("Garden", "the garden")
        assert score_file(note, ["garden"]) == 11

    def test_keyword_is_literal(self):
        note = make_file("Prices", "costs went up by 5.00 and c++ too")
        assert score_file(note, ["c++"]) == 1
        assert score_file(note, ["5.00"]) == 1
        assert score_file(note, ["a.b"]) == 0


class TestRankFiles:
    """Tests for rank_files."""

    def test_sorted_by_score(self):
        files = [
            make_file("One", "garden"),
            make_file("Garden", "garden garden"),
            make_file("Two", "garden garden"),
        ]
        ranked = rank_files("garden", files)

        assert [s.file.title for s in ranked] == ["Garden", "Two", "One"]
        assert [s.score for s in ranked] == [12, 2, 1]

    def test_excludes_zero_scores(self):
        files = [make_file("A", "garden"), make_file("B", "kitchen")]
        ranked = rank_files("garden", files)

        assert [s.file.title for s in ranked] == ["A"]
        assert all(s.score > 0 for s in ranked)

    def test_ties_keep_input_order(self):
        files = [make_file(f"N{i}", "garden") for i in range(5)]
        ranked = rank_files("garden", files)

        assert [s.file.title for s in ranked] == ["N0", "N1", "N2", "N3", "N4"]

    def test_respects_max(self):
        files = [make_file(f"N{i}", "garden " * i) for i in range(1, 30)]
        ranked = rank_files("garden", files, max_notes=20)

        assert len(ranked) == 20
        scores = [s.score for s in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_subset_of_input(self):
        files = [make_file(f"N{i}", "garden" if i % 2 else "other") for i in range(10)]
        ranked = rank_files("garden", files)

        assert all(s.file in files for s in ranked)

    def test_no_keywords(self):
        files = [make_file("A", "what is this")]
        assert rank_files("what is this", files) == []


class TestSelectContext:
    """Tests for select_context and the fallback."""

    def test_uses_ranked_notes(self):
        files = [make_file("A", "kitchen"), make_file("B", "garden")]
        notes, used_fallback = select_context("garden", files)

        assert [n.title for n in notes] == ["B"]
        assert used_fallback is False

    def test_stop_word_question_falls_back(self):
        files = [make_file(f"N{i}", "content") for i in range(15)]
        notes, used_fallback = select_context("what is this", files)

        assert used_fallback is True
        assert notes == files[:10]

    def test_fallback_never_empty(self):
        files = [make_file("Only", "content")]
        notes, used_fallback = select_context("nothing matches here", files)

        assert used_fallback is True
        assert notes == files

    def test_fallback_notes_bound(self):
        files = [make_file(f"N{i}", "x") for i in range(3)]
        assert fallback_notes(files, limit=2) == files[:2]
        assert fallback_notes([], limit=2) == []
