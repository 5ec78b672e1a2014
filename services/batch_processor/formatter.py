"""Result records written to the batch output file."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ProcessedRecord:
    """One output record per input item.

    ``result`` is None only when processing the item failed; ``logs`` then
    carries the error description.
    """

    input: Any
    result: Optional[str]
    logs: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": self.input,
            "result": self.result,
            "logs": self.logs,
        }


def format_result(raw_input: Any, result: Optional[str], logs: str) -> ProcessedRecord:
    """Wrap an item and its processing outcome into a ProcessedRecord."""
    return ProcessedRecord(input=raw_input, result=result, logs=logs)
