"""
Per-item transformation.

Each item is rendered to a string, upper-cased and annotated with its
1-based position in the batch.
"""

import json
import logging
import math
import re
from decimal import Decimal
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

# Floats outside [1e-6, 1e21) keep exponent notation.
_MIN_POSITIONAL_FLOAT = 1e-6
_MAX_POSITIONAL_FLOAT = 1e21

_EXPONENT_PADDING = re.compile(r"e([+-])0*(\d)")


class ItemResult(NamedTuple):
    """Outcome of processing one item."""

    result: str
    logs: str


def _format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return repr(value)
    magnitude = abs(value)
    if value.is_integer() and magnitude < _MAX_POSITIONAL_FLOAT:
        return str(int(value))
    if _MIN_POSITIONAL_FLOAT <= magnitude < _MAX_POSITIONAL_FLOAT:
        # repr gives the shortest round-tripping digits; Decimal lays them out positionally
        return format(Decimal(repr(value)), "f")
    return _EXPONENT_PADDING.sub(r"e\1\2", repr(value))


def _to_compact_json(value: Any) -> str:
    if isinstance(value, dict):
        members = (
            f"{json.dumps(str(key), ensure_ascii=False)}:{_to_compact_json(member)}"
            for key, member in value.items()
        )
        return "{" + ",".join(members) + "}"
    if isinstance(value, list):
        return "[" + ",".join(_to_compact_json(element) for element in value) + "]"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _format_number(value)
    return json.dumps(value, ensure_ascii=False)


def stringify_item(value: Any) -> str:
    """
    Render an item as a string.

    - str: unchanged
    - bool / None: JSON literal (``true``, ``false``, ``null``)
    - int / float: decimal form, ``1.0`` renders as ``1``; exponent form
      (``1.5e-7``, ``1e+21``) only outside [1e-6, 1e21)
    - dict / list: compact JSON, nested numbers formatted as above
    - anything else: ``str(value)``
    """
    if isinstance(value, str):
        return value
    # bool before numbers: bool is a subclass of int
    if value is None or isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (int, float)):
        return _format_number(value)
    if isinstance(value, (dict, list)):
        return _to_compact_json(value)
    return str(value)


def process_item(raw_input: Any, index: int) -> ItemResult:
    """
    Transform one item.

    Args:
        raw_input: The item as decoded from the input file
        index: Zero-based position of the item in the batch

    Returns:
        ItemResult with the transformed string and a one-line log message

    Examples:
        >>> process_item("abc", 0)
        ItemResult(result='ABC [processed #1]', logs='Successfully processed item #1 with length 3.')
    """
    position = index + 1
    input_string = stringify_item(raw_input)

    result = f"{input_string.upper()} [processed #{position}]"
    logs = f"Successfully processed item #{position} with length {len(input_string)}."
    logger.debug("Raw input for item #%d: %s", position, input_string)

    return ItemResult(result=result, logs=logs)
