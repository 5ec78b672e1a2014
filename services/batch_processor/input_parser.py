"""
Input Loading and Normalization

Reads the batch input file and turns it into an ordered list of items.

Supported input shapes:
- empty / whitespace-only file  -> []
- {"items": [...]}              -> the items list
- [...]                         -> the list itself
- any other JSON value          -> [value]
"""

import json
import logging
from pathlib import Path
from typing import Any, NoReturn

logger = logging.getLogger(__name__)


class InputError(Exception):
    """Base class for failures while loading the input file."""
    pass


class NotFoundError(InputError):
    """Raised when the input path does not exist."""
    pass


class NotAFileError(InputError):
    """Raised when the input path exists but is not a regular file."""
    pass


class MalformedInputError(InputError):
    """Raised when the input file is not valid JSON."""
    pass


class InputReadError(InputError):
    """Raised when the input path cannot be inspected or read by the operating system."""
    pass


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"Non-standard JSON constant: {name}")


def safe_json_parse(json_string: str, source: str) -> Any:
    """
    Parse JSON text, wrapping any failure in MalformedInputError.

    Args:
        json_string: Raw JSON text
        source: Where the text came from, used in the error message

    Returns:
        The decoded JSON value

    Raises:
        MalformedInputError: If the text is not valid JSON. The original
            decoding error is kept as ``__cause__``.
    """
    try:
        return json.loads(json_string, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedInputError(f"Failed to parse JSON from {source}: {exc}") from exc


def normalize_input(raw: Any) -> list[Any]:
    """
    Normalize a decoded JSON value into a list of items.

    A mapping is unwrapped only when its ``items`` key holds a list; any
    other mapping (including ``{"items": "text"}``) becomes a single item.
    """
    if isinstance(raw, dict) and isinstance(raw.get("items"), list):
        return raw["items"]

    if isinstance(raw, list):
        return raw

    return [raw]


def parse_input_file(input_path: str) -> list[Any]:
    """
    Read and parse an input JSON file, normalizing the result to a list.

    Args:
        input_path: Path to the input file (relative paths resolve against
            the current working directory)

    Returns:
        Ordered list of items. Empty when the file has no content.

    Raises:
        NotFoundError: If the path does not exist
        NotAFileError: If the path is a directory or other non-file
        MalformedInputError: If the content is not valid JSON
        InputReadError: If the path cannot be accessed or read (e.g. name too
            long, permission denied, I/O error)
    """
    try:
        resolved_path = Path(input_path).resolve()
        exists = resolved_path.exists()
        is_file = exists and resolved_path.is_file()
    except OSError as exc:
        raise InputReadError(f"Cannot access input path {input_path}: {exc}") from exc

    if not exists:
        raise NotFoundError(f"Input file does not exist: {resolved_path}")

    if not is_file:
        raise NotAFileError(f"Input path is not a file: {resolved_path}")

    try:
        content = resolved_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"Input file is not valid UTF-8: {resolved_path}") from exc
    except OSError as exc:
        raise InputReadError(f"Failed to read input file {resolved_path}: {exc}") from exc

    if not content.strip():
        logger.debug("Input file is empty: %s", resolved_path)
        return []

    raw = safe_json_parse(content, str(resolved_path))
    items = normalize_input(raw)
    logger.debug("Loaded %d item(s) from %s", len(items), resolved_path)
    return items
