"""Routing of exported documents to files or stdout."""

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional, TextIO

from ..utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

EXPORT_BASENAME = "export"


def _write_atomic(path: Path, content: str) -> None:
    """Write to a temporary sibling file, then move it into place."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def write_output(
    content: str,
    file_extension: str,
    output: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> Optional[Path]:
    """
    Write an exported document to its destination.

    Args:
        content: Complete document text
        file_extension: Extension used for the file inside output_dir
        output: Target file path
        output_dir: Directory (created if missing) receiving export.<ext>
        stream: Stream used when no path is given (defaults to stdout)

    Returns:
        Path written to, or None when written to the stream

    Raises:
        ConfigurationError: If both output and output_dir are given
    """
    if output is not None and output_dir is not None:
        raise ConfigurationError("Use either an output file or an output directory, not both")

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        output = output_dir / f"{EXPORT_BASENAME}.{file_extension}"

    if output is not None:
        _write_atomic(output, content)
        logger.info(f"Wrote {len(content.encode('utf-8'))} bytes to {output}")
        return output

    stream = stream or sys.stdout
    stream.write(content)
    if not content.endswith("\n"):
        stream.write("\n")
    stream.flush()
    return None
