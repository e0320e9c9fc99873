"""Vault reader - walks a folder tree and snapshots markdown notes."""

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path

import yaml

from vaultsage.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"

# Folder name used for notes that sit directly in the walked root
ROOT_FOLDER = "Root"

# Tooling folders that never hold notes
EXCLUDED_DIR_NAMES = frozenset({"node_modules", "__pycache__"})

DATE_IN_NAME = re.compile(r"(\d{4}-\d{2}-\d{2})")
WIKILINK = re.compile(r"\[\[.*?\]\]")
FRONTMATTER = re.compile(r"^---\n(.*?)\n---", re.DOTALL)


@dataclass(frozen=True)
class VaultFile:
    """Snapshot of a single markdown note taken at read time."""

    path: Path
    title: str
    folder: str
    mtime: float
    size: int
    content: str

    @property
    def top_folder(self) -> str:
        """First segment of the folder, or ROOT_FOLDER."""
        return self.folder.split("/")[0]

    @property
    def modified(self) -> datetime:
        return datetime.fromtimestamp(self.mtime, UTC)


def is_excluded_dir(name: str) -> bool:
    """Hidden folders (.obsidian, .git, .trash...) and tooling folders."""
    return name.startswith(".") or name in EXCLUDED_DIR_NAMES


def walk_markdown(
    root: Path,
    max_depth: int | None = None,
    exclude: Callable[[str], bool] = is_excluded_dir,
) -> Iterator[Path]:
    """Yield markdown files under root.

    Args:
        root: Directory to walk
        max_depth: Number of directory levels to read (1 = root only, None = unlimited)
        exclude: Predicate on a directory name; matching directories are pruned
    """
    if max_depth is not None and max_depth <= 0:
        return

    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        logger.warning(f"Cannot read folder {root}: {e}")
        return

    next_depth = None if max_depth is None else max_depth - 1
    for entry in entries:
        try:
            # Symlinks are neither walked nor read; a link to an ancestor would loop
            if entry.is_symlink():
                continue
            if entry.is_dir():
                if not exclude(entry.name):
                    yield from walk_markdown(entry, next_depth, exclude)
            elif entry.is_file() and entry.name.endswith(MARKDOWN_SUFFIX):
                yield entry
        except OSError as e:
            logger.warning(f"Skipping {entry}: {e}")


def check_folder(path: Path) -> Path:
    """Resolve a folder path, raising NotFoundError or InvalidInputError."""
    path = Path(path).expanduser()
    if not path.exists():
        raise NotFoundError(f"Folder not found: {path}")
    if not path.is_dir():
        raise InvalidInputError(f"Not a folder: {path}")
    return path.resolve()


def read_file(file_path: Path, root: Path) -> VaultFile:
    """Read one note relative to the walked root."""
    content = file_path.read_text(encoding="utf-8")
    stat = file_path.stat()

    rel_folder = file_path.parent.relative_to(root).as_posix()
    folder = ROOT_FOLDER if rel_folder == "." else rel_folder

    return VaultFile(
        path=file_path,
        title=file_path.stem,
        folder=folder,
        mtime=stat.st_mtime,
        size=stat.st_size,
        content=content,
    )


def read_vault(root: Path, max_depth: int | None = None) -> list[VaultFile]:
    """Read every markdown note under root.

    Unreadable notes are skipped with a warning. The order of the returned
    list is not meaningful; callers sort what they need.

    Raises:
        NotFoundError: If root does not exist
        InvalidInputError: If root is a file
    """
    root = check_folder(root)

    files: list[VaultFile] = []
    for md_file in walk_markdown(root, max_depth):
        try:
            files.append(read_file(md_file, root))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {md_file}: {e}")
            continue

    logger.debug(f"Read {len(files)} notes from {root}")
    return files


def count_links(content: str) -> int:
    """Number of [[wikilink]] occurrences."""
    return len(WIKILINK.findall(content))


def parse_frontmatter(content: str) -> dict:
    """Parse YAML frontmatter from note content."""
    if not content.startswith("---"):
        return {}

    match = FRONTMATTER.match(content)
    if not match:
        return {}

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return {}
    return data if isinstance(data, dict) else {}


def _valid_date(text: str) -> str | None:
    match = DATE_IN_NAME.search(text)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1)).isoformat()
    except ValueError:
        return None


def extract_date(file: VaultFile) -> str | None:
    """Date of a note as YYYY-MM-DD, from its file name or a frontmatter date field."""
    found = _valid_date(file.path.name)
    if found:
        return found

    value = parse_frontmatter(file.content).get("date")
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return _valid_date(value)
    return None
