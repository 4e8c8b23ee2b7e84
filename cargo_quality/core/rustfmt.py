"""
Rustfmt Wrapper Module

Runs ``cargo +nightly fmt`` with the project's formatting defaults.
"""

import logging
import subprocess
from dataclasses import dataclass, fields
from typing import List, Optional

from .errors import FormatterError, IoError

logger = logging.getLogger(__name__)


@dataclass
class RustfmtConfig:
    """rustfmt options passed on the command line."""
    trailing_comma: str = "Never"
    brace_style: str = "SameLineWhere"
    struct_field_align_threshold: int = 20
    wrap_comments: bool = True
    format_code_in_doc_comments: bool = True
    struct_lit_single_line: bool = False
    max_width: int = 99
    imports_granularity: str = "Crate"
    group_imports: str = "StdExternalCrate"
    reorder_imports: bool = True
    unstable_features: bool = True

    def to_args(self) -> List[str]:
        """Render as ``--config key=value`` pairs, booleans lowercased."""
        args = []
        for option in fields(self):
            value = getattr(self, option.name)
            if isinstance(value, bool):
                value = str(value).lower()
            args.extend(["--config", f"{option.name}={value}"])
        return args


def build_command(config: RustfmtConfig) -> List[str]:
    return ["cargo", "+nightly", "fmt", "--"] + config.to_args()


def format_code(config: Optional[RustfmtConfig] = None, cwd: Optional[str] = None, timeout: int = 300):
    """
    Format the current cargo project.

    Args:
        config: rustfmt options, project defaults if omitted
        cwd: Directory to run cargo in
        timeout: Seconds before giving up

    Raises:
        IoError: If cargo cannot be started or times out
        FormatterError: If cargo exits unsuccessfully
    """
    command = build_command(config or RustfmtConfig())
    logger.debug(f"Running: {' '.join(command)}")

    try:
        result = subprocess.run(command, capture_output=True, text=True, timeout=timeout, cwd=cwd)
    except FileNotFoundError as e:
        logger.error("cargo not found in PATH")
        raise IoError("cargo", e) from e
    except subprocess.TimeoutExpired as e:
        logger.error(f"cargo fmt timed out after {timeout}s")
        raise IoError("cargo", OSError(f"timed out after {timeout}s")) from e

    if result.returncode != 0:
        message = result.stderr.strip() or f"cargo fmt failed with status: {result.returncode}"
        raise FormatterError(message, result.returncode)

    logger.info("Code formatted successfully")
