"""
mod.rs Convention Module

Finds ``foo/mod.rs`` module files and moves them to the modern ``foo.rs``
layout.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .errors import IoError
from .files import SKIPPED_DIRS, read_source, write_source

logger = logging.getLogger(__name__)

MOD_RS = "mod.rs"


@dataclass(frozen=True)
class ModRsIssue:
    path: Path
    suggested: Path
    message: str
    line: int = 1
    column: int = 1


@dataclass
class ModRsResult:
    issues: List[ModRsIssue] = field(default_factory=list)

    def __len__(self):
        return len(self.issues)

    @property
    def is_empty(self) -> bool:
        return not self.issues


def create_issue(path: Path) -> Optional[ModRsIssue]:
    """Describe the move for ``<parent>/<module>/mod.rs``; None without a parent module dir."""
    module_dir = path.parent
    module_name = module_dir.name
    if not module_name or module_dir.parent == module_dir:
        return None

    return ModRsIssue(
        path=path,
        suggested=module_dir.parent / f"{module_name}.rs",
        message=f"Use `{module_name}.rs` instead of `{module_name}/mod.rs` (modern module style)",
    )


def find_mod_rs_issues(path: Union[str, Path]) -> ModRsResult:
    """
    Find ``mod.rs`` files under ``path``.

    Raises:
        IoError: If ``path`` does not exist
    """
    root = Path(path)
    if not root.exists():
        raise IoError(str(root), FileNotFoundError(2, "No such file or directory"))

    result = ModRsResult()
    if root.is_file():
        issue = create_issue(root) if root.name == MOD_RS else None
        if issue is not None:
            result.issues.append(issue)
        return result

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith(".") and d not in SKIPPED_DIRS)
        if MOD_RS in filenames:
            issue = create_issue(Path(dirpath) / MOD_RS)
            if issue is not None:
                result.issues.append(issue)

    logger.debug(f"Found {len(result)} mod.rs file(s) under {root}")
    return result


def fix_mod_rs(issue: ModRsIssue):
    """
    Move a ``mod.rs`` file to its suggested location.

    The emptied module directory is removed.

    Raises:
        IoError: If the target exists or the move fails
    """
    if issue.suggested.exists():
        raise IoError(str(issue.suggested), FileExistsError(17, "File exists"))

    write_source(issue.suggested, read_source(issue.path))
    try:
        issue.path.unlink()
        module_dir = issue.path.parent
        if not any(module_dir.iterdir()):
            module_dir.rmdir()
    except OSError as e:
        raise IoError(str(issue.path), e) from e

    logger.info(f"Moved {issue.path} to {issue.suggested}")


def fix_all_mod_rs(path: Union[str, Path]) -> int:
    """Apply every mod.rs move under ``path``; returns how many files were moved."""
    result = find_mod_rs_issues(path)
    for issue in result.issues:
        fix_mod_rs(issue)
    return len(result)
