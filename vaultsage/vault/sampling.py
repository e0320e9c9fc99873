"""Representative sampling of notes for folder and theme summaries.

A sample blends three groups so that summaries are not biased toward only the
newest or only the loudest notes:

1. Recently modified notes (40%)
2. Notes with the highest importance score (30%)
3. Notes spread evenly over the remaining timeline (the rest)
"""

import re
import time
from datetime import timedelta

from .reader import VaultFile, count_links

RECENT_PERCENT = 40
IMPORTANT_PERCENT = 30

RECENT_BONUS = 50
SEMI_RECENT_BONUS = 25
RECENT_WINDOW = timedelta(days=30)
SEMI_RECENT_WINDOW = timedelta(days=90)

LINK_WEIGHT = 10
GOAL_BONUS = 20
GOAL_KEYWORDS = re.compile(r"goal|important|key|critical|vision|plan", re.IGNORECASE)


def importance_score(file: VaultFile, now: float | None = None) -> int:
    """Query-independent significance of a note.

    Longer, recently edited, well-linked notes that talk about goals and plans
    score higher.
    """
    now = time.time() if now is None else now
    score = file.size // 100

    age = now - file.mtime
    if age < RECENT_WINDOW.total_seconds():
        score += RECENT_BONUS
    elif age < SEMI_RECENT_WINDOW.total_seconds():
        score += SEMI_RECENT_BONUS

    score += LINK_WEIGHT * count_links(file.content)

    if GOAL_KEYWORDS.search(file.content):
        score += GOAL_BONUS

    return score


def _ceil_percent(size: int, percent: int) -> int:
    # Integer ceiling; float shares round 10 * 0.3 up to 4
    return -(-size * percent // 100)


def split_sizes(size: int) -> tuple[int, int, int]:
    """(recent, important, distributed) counts for a sample of the given size."""
    recent = min(_ceil_percent(size, RECENT_PERCENT), size)
    important = min(_ceil_percent(size, IMPORTANT_PERCENT), size - recent)
    return recent, important, size - recent - important


def select_sample(files: list[VaultFile], size: int, now: float | None = None) -> list[VaultFile]:
    """Select `size` notes representing the whole set.

    Returns the input unchanged when it already has `size` notes or fewer.
    """
    if len(files) <= size:
        return files
    if size <= 0:
        return []

    now = time.time() if now is None else now
    recent_count, important_count, distributed_count = split_sizes(size)

    recent = sorted(files, key=lambda f: f.mtime, reverse=True)[:recent_count]
    taken = {f.path for f in recent}

    remaining = [f for f in files if f.path not in taken]
    # Larger notes win score ties
    important = sorted(
        remaining, key=lambda f: (importance_score(f, now), f.size), reverse=True
    )
    important = important[:important_count]
    taken.update(f.path for f in important)

    rest = sorted((f for f in remaining if f.path not in taken), key=lambda f: f.mtime)
    distributed: list[VaultFile] = []
    if distributed_count > 0:
        interval = max(1, len(rest) // distributed_count)
        for i in range(distributed_count):
            if i * interval >= len(rest):
                break
            distributed.append(rest[i * interval])

    return recent + important + distributed
