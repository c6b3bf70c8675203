"""Input/output utilities for reading and writing JSONL files."""

import json
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any


def read_jsonl(
    path: Path | str,
    on_invalid: Callable[[int, json.JSONDecodeError], None] | None = None,
) -> Iterator[dict[str, Any]]:
    """Read a JSONL file and yield each record.

    Args:
        path: Path to the JSONL file.
        on_invalid: Optional callback for lines that are not valid JSON.
            When given, the line is reported and skipped instead of raising.

    Yields:
        Each parsed JSON record.

    Raises:
        ValueError: On an invalid line when no on_invalid callback is given.
    """
    with open(path, encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                if on_invalid is None:
                    raise ValueError(f"Invalid JSON on line {line_num}: {e}") from e
                on_invalid(line_num, e)
                continue
            yield record


def write_jsonl(path: Path | str, records: Iterable[dict[str, Any]]) -> int:
    """Write records to a JSONL file.

    Args:
        path: Path to write the JSONL file.
        records: Iterable of records to write.

    Returns:
        Number of records written.
    """
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            count += 1
    return count
