"""
Output Writer

Persists the batch report as pretty-printed JSON, creating the output
directory on demand. Existing files are overwritten in place.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class WriteError(Exception):
    """Raised when the output file cannot be written."""
    pass


def write_output_file(output_path: str, data: Any) -> Path:
    """
    Write ``data`` to ``output_path`` as JSON with 2-space indentation.

    Args:
        output_path: Destination file. Missing parent directories are created.
        data: JSON-serializable value

    Returns:
        The resolved path that was written

    Raises:
        WriteError: If the directory cannot be created, the data cannot be
            serialized, or the file cannot be written
    """
    resolved_path = Path(output_path).resolve()
    directory = resolved_path.parent

    try:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise WriteError(f"Failed to serialize output for {resolved_path}: {exc}") from exc

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Failed to create output directory {directory}: {exc}") from exc

    try:
        resolved_path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Failed to write output file {resolved_path}: {exc}") from exc

    logger.info("Output written to: %s", resolved_path)
    return resolved_path
