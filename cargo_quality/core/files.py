"""
File Utilities Module

Discovery of Rust sources under a path and the read/write helpers every
command uses, so that OS failures surface uniformly as IoError.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import List, Union

from .errors import IoError

logger = logging.getLogger(__name__)

SKIPPED_DIRS = {"target"}

PathLike = Union[str, Path]


def _load_ignore_patterns(root: Path) -> List[str]:
    gitignore = root / ".gitignore"
    if not gitignore.is_file():
        return []

    patterns = []
    for raw in read_source(gitignore).splitlines():
        line = raw.strip()
        # Negations are not supported; treat them as absent.
        if not line or line.startswith("#") or line.startswith("!"):
            continue
        patterns.append(line.strip("/"))
    return patterns


def _is_ignored(relative: str, name: str, patterns: List[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(relative, pattern) for pattern in patterns)


def collect_rust_files(path: PathLike) -> List[Path]:
    """
    Collect Rust source files under ``path``.

    A ``.rs`` file yields itself and any other file yields nothing. A
    directory is walked recursively in sorted order, skipping hidden
    directories, ``target`` and entries matched by the root ``.gitignore``.

    Raises:
        IoError: If ``path`` does not exist
    """
    root = Path(path)
    if not root.exists():
        raise IoError(str(root), FileNotFoundError(2, "No such file or directory"))

    if root.is_file():
        return [root] if root.suffix == ".rs" else []

    patterns = _load_ignore_patterns(root)
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)

        kept = []
        for dirname in sorted(dirnames):
            relative = (rel_dir / dirname).as_posix()
            if dirname.startswith(".") or dirname in SKIPPED_DIRS or _is_ignored(relative, dirname, patterns):
                continue
            kept.append(dirname)
        dirnames[:] = kept

        for filename in sorted(filenames):
            relative = (rel_dir / filename).as_posix()
            if filename.endswith(".rs") and not _is_ignored(relative, filename, patterns):
                files.append(current / filename)

    files.sort()
    logger.debug(f"Found {len(files)} Rust file(s) under {root}")
    return files


def read_source(path: PathLike) -> str:
    """Read a UTF-8 source file, raising IoError on failure."""
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise IoError(str(path), OSError(f"not valid UTF-8: {e.reason}")) from e
    except OSError as e:
        raise IoError(str(path), e) from e


def write_source(path: PathLike, content: str):
    """Write a UTF-8 source file, raising IoError on failure."""
    try:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
    except OSError as e:
        raise IoError(str(path), e) from e
