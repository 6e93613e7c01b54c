"""
File I/O for class files.

Reads source files and writes generated ones atomically so an interrupted
write never leaves a truncated class file behind.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import OutputValidationError

logger = logging.getLogger(__name__)


def read_all_text(path: str | Path) -> str:
    """Read a whole text file.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
    """
    with open(path, encoding="utf-8") as f:
        return f.read()


def validate_csharp(content: str) -> None:
    """Structural checks on a generated class file (no full parse).

    Raises:
        OutputValidationError: If the text has no type definition or
            unbalanced braces
    """
    if "class " not in content and "enum " not in content:
        raise OutputValidationError("Generated C# code has no type definitions")

    open_braces = content.count("{")
    close_braces = content.count("}")
    if open_braces != close_braces:
        raise OutputValidationError(f"Generated C# code has unbalanced braces: {open_braces} open, {close_braces} close")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate: Optional validation function, defaults to validate_csharp
        """
        self._validate = validate or validate_csharp

    def write(self, path: str | Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            if validate:
                self._validate(content)

            temp_path.replace(path)
            logger.debug("Wrote %d characters to %s", len(content), path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_path)
            raise

    def write_if_not_exists(self, path: str | Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True if the file was written

        Raises:
            FileExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        path = Path(path)
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        self.write(path, content, validate)
        return True
