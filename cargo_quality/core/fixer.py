"""
Quality Fixer Module

Runs the fix pass of a set of analyzers over a file, with timestamped
backups of everything it overwrites and restoration of the latest backup.
"""

import datetime
import hashlib
import logging
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from .analyzer import Analyzer
from .errors import IoError, ParseError
from .files import read_source, write_source
from .syntax import parse, unparse

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_DIR = ".cargo_quality_backups"


class FixResult:
    """Result of a fix pass on a single file."""

    def __init__(self, path: str, fixes_applied: int = 0, original: str = "", fixed: str = ""):
        self.path = path
        self.fixes_applied = fixes_applied
        self.original = original
        self.fixed = fixed

    @property
    def changed(self) -> bool:
        return self.original != self.fixed

    def __repr__(self):
        return f"FixResult(path='{self.path}', fixes={self.fixes_applied})"


class QualityFixer:
    """
    Applies analyzer fixes to Rust files.

    This class provides:
    - A fix pass running every analyzer on one tree, in order
    - Dry runs that compute the result without writing
    - Timestamped backups and restoration of the most recent one
    """

    def __init__(self, analyzers: Sequence[Analyzer], backup_enabled: bool = True,
                 backup_dir: str = DEFAULT_BACKUP_DIR):
        """
        Initialize the fixer.

        Args:
            analyzers: Analyzers whose fixes to apply, in order
            backup_enabled: Whether to back files up before overwriting them
            backup_dir: Directory the backups are written to
        """
        self.analyzers = list(analyzers)
        self.backup_enabled = backup_enabled
        self.backup_dir = backup_dir

    def backup_prefix(self, filepath: str) -> str:
        """Return the backup name prefix for ``filepath``, unique per resolved path."""
        resolved = str(Path(filepath).resolve())
        digest = hashlib.sha1(resolved.encode("utf-8")).hexdigest()[:12]
        return f"{Path(filepath).name}.{digest}"

    def create_backup(self, filepath: str) -> Optional[Path]:
        """
        Copy ``filepath`` into the backup directory.

        Returns:
            Path of the backup, or None when backups are disabled
        """
        if not self.backup_enabled:
            return None

        backup_path = Path(self.backup_dir)
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_filepath = backup_path / f"{self.backup_prefix(filepath)}.{timestamp}.backup"
        try:
            backup_path.mkdir(parents=True, exist_ok=True)
            shutil.copy2(filepath, backup_filepath)
        except OSError as e:
            logger.error(f"Failed to create backup for {filepath}: {e}")
            raise IoError(filepath, e) from e

        logger.info(f"Created backup: {backup_filepath}")
        return backup_filepath

    def fix_file(self, filepath: str, dry_run: bool = False) -> FixResult:
        """
        Apply every analyzer's fixes to a file.

        The file is written only after all analyzers succeeded, and only
        when something changed.

        Args:
            filepath: Path to the Rust file
            dry_run: Compute the result without writing it

        Raises:
            IoError: If the file cannot be read, backed up or written
            ParseError: If the file does not parse
            FixError: If a fix leaves the source unparsable

        Returns:
            FixResult with the original and fixed text
        """
        path = str(filepath)
        original = read_source(path)
        try:
            tree = parse(original)
        except ParseError as e:
            raise e.with_path(path) from e

        total = 0
        for analyzer in self.analyzers:
            applied = analyzer.fix(tree)
            if applied:
                logger.debug(f"{path}: {analyzer.name} fixed {applied} issue(s)")
            total += applied

        fixed = unparse(tree)
        result = FixResult(path, total, original, fixed)

        if dry_run or not result.changed:
            return result

        self.create_backup(path)
        write_source(path, fixed)
        logger.info(f"Fixed {total} issue(s) in {path}")
        return result

    def fix_files(self, filepaths: List[str], dry_run: bool = False) -> List[FixResult]:
        return [self.fix_file(filepath, dry_run) for filepath in filepaths]

    def restore_from_backup(self, filepath: str) -> bool:
        """
        Restore a file from its most recent backup.

        Args:
            filepath: Path to the file to restore

        Raises:
            IoError: If the backup cannot be copied back

        Returns:
            True if a backup was found and restored
        """
        backup_path = Path(self.backup_dir)
        if not backup_path.is_dir():
            logger.error("No backup directory found")
            return False

        backup_files = sorted(backup_path.glob(f"{self.backup_prefix(filepath)}.*.backup"))
        if not backup_files:
            logger.error(f"No backup found for {filepath}")
            return False

        most_recent = backup_files[-1]
        try:
            shutil.copy2(most_recent, filepath)
        except OSError as e:
            raise IoError(str(filepath), e) from e

        logger.info(f"Restored {filepath} from backup {most_recent}")
        return True
