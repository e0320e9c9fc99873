"""Tests for representative sampling."""

from pathlib import Path

import pytest

from vaultsage.vault.reader import VaultFile
from vaultsage.vault.sampling import importance_score, select_sample, split_sizes

NOW = 1_750_000_000.0
DAY = 24 * 60 * 60


def make_file(name: str, age_days: float, content: str = "plain text", size: int | None = None) -> VaultFile:
    return VaultFile(
        path=Path(f"/vault/{name}.md"),
        title=name,
        folder="Root",
        mtime=NOW - age_days * DAY,
        size=len(content) if size is None else size,
        content=content,
    )


class TestImportanceScore:
    """Tests for importance_score."""

    def test_old_plain_note(self):
        note = make_file("old", age_days=365, content="nothing", size=250)
        assert importance_score(note, NOW) == 2

    def test_recency_bonus(self):
        assert importance_score(make_file("a", 5, "x", size=0), NOW) == 50
        assert importance_score(make_file("b", 60, "x", size=0), NOW) == 25
        assert importance_score(make_file("c", 120, "x", size=0), NOW) == 0

    def test_links(self):
        note = make_file("hub", 365, "[[A]] [[B]] [[C]]", size=0)
        assert importance_score(note, NOW) == 30

    def test_goal_keyword(self):
        note = make_file("g", 365, "My VISION for next year", size=0)
        assert importance_score(note, NOW) == 20

    def test_combined(self):
        note = make_file("all", 10, "Key plan: see [[Roadmap]]", size=1000)
        assert importance_score(note, NOW) == 10 + 50 + 10 + 20


class TestSplitSizes:
    """Tests for split_sizes."""

    @pytest.mark.parametrize(
        "size,expected",
        [(1, (1, 0, 0)), (2, (1, 1, 0)), (3, (2, 1, 0)), (10, (4, 3, 3)), (15, (6, 5, 4))],
    )
    def test_split(self, size, expected):
        assert split_sizes(size) == expected
        assert sum(split_sizes(size)) == size


class TestSelectSample:
    """Tests for select_sample."""

    def test_small_set_unchanged(self):
        files = [make_file(f"n{i}", i) for i in range(5)]
        assert select_sample(files, 5) is files
        assert select_sample(files, 10) is files

    @pytest.mark.parametrize("size", [1, 2, 3, 7, 10, 19])
    def test_exact_size_and_distinct(self, size):
        files = [make_file(f"n{i}", age_days=i * 3) for i in range(20)]
        sample = select_sample(files, size, now=NOW)

        assert len(sample) == size
        assert len({f.path for f in sample}) == size
        assert all(f in files for f in sample)

    def test_recent_first(self):
        files = [make_file(f"n{i}", age_days=i) for i in range(20)]
        sample = select_sample(files, 10, now=NOW)

        # 4 most recent notes lead the sample
        assert [f.title for f in sample[:4]] == ["n0", "n1", "n2", "n3"]

    def test_important_notes_chosen(self):
        files = [make_file(f"n{i}", age_days=200 + i) for i in range(20)]
        files[15] = make_file("hub", age_days=215, content="[[A]] [[B]] [[C]] [[D]] goal")
        sample = select_sample(files, 10, now=NOW)

        important = sample[4:7]
        assert "hub" in [f.title for f in important]

    def test_larger_note_wins_score_tie(self):
        files = [make_file(f"n{i}", age_days=200 + i) for i in range(10)]
        files[8] = make_file("small", age_days=208, content="x", size=150)
        files[9] = make_file("large", age_days=209, content="x", size=199)
        sample = select_sample(files, 2, now=NOW)

        # One recent note, then the single important slot
        assert sample[1].title == "large"

    def test_distributed_spread_over_time(self):
        # Ages 0..99 days; recent and important parts pick the newest notes
        files = [make_file(f"n{i:02d}", age_days=i) for i in range(100)]
        sample = select_sample(files, 10, now=NOW)

        distributed = sample[7:]
        ages = sorted(round((NOW - f.mtime) / DAY) for f in distributed)
        # Spread should reach back to the oldest part of the timeline
        assert max(ages) >= 90

    def test_parts_do_not_overlap(self):
        files = [make_file(f"n{i}", age_days=i, content="plan" if i % 3 else "x") for i in range(40)]
        sample = select_sample(files, 15, now=NOW)

        recent, important, distributed = sample[:6], sample[6:11], sample[11:]
        paths = [{f.path for f in part} for part in (recent, important, distributed)]
        assert not paths[0] & paths[1]
        assert not paths[0] & paths[2]
        assert not paths[1] & paths[2]

    def test_zero_size(self):
        files = [make_file(f"n{i}", i) for i in range(3)]
        assert select_sample(files, 0) == []
