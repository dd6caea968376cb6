"""Reading listing sources and persisting reports."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_lines(filepath: str | Path) -> list[str] | None:
    """
    Read all lines of a UTF-8 text file.

    Args:
        filepath: Path to the input file

    Returns:
        List of lines, or None if the file is missing or unreadable
    """
    path = Path(filepath)
    if not path.exists():
        logger.info("'%s' not found", path)
        return None

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading %s: %s", path, e)
        return None

    logger.info("Read %d lines from %s", len(lines), path)
    return lines


def write_report(filepath: str | Path, content: str) -> bool:
    """
    Write report text to a file, replacing any previous content.

    Args:
        filepath: Path to output file
        content: Report text

    Returns:
        True if written, False if the write failed
    """
    path = Path(filepath)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Error writing report to %s: %s", path, e)
        return False

    logger.info("Report saved to %s", path)
    return True


def write_lines(filepath: str | Path, lines: list[str]) -> int:
    """
    Write lines to a UTF-8 text file.

    Returns:
        Number of lines written
    """
    path = Path(filepath)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line + "\n")
    return len(lines)
