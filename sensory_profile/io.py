"""Input/output utilities for JSONL files and assessment record sinks."""

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, Protocol

from sensory_profile.builders.record import AssessmentRecord

logger = logging.getLogger(__name__)


def read_jsonl(path: Path | str) -> Iterator[dict[str, Any]]:
    """Read a JSONL file and yield each record.

    Args:
        path: Path to the JSONL file.

    Yields:
        Each parsed JSON record.
    """
    with open(path) as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_num}: {e}") from e


def write_jsonl(path: Path | str, records: Iterable[dict[str, Any]]) -> int:
    """Write records to a JSONL file.

    Args:
        path: Path to write the JSONL file.
        records: Iterable of records to write.

    Returns:
        Number of records written.
    """
    count = 0
    with open(path, "w") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            count += 1
    return count


class ResultSink(Protocol):
    """Destination for completed assessment records."""

    def write(self, record: AssessmentRecord) -> None: ...


class JsonlResultSink:
    """Appends one JSON line per record to a file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def write(self, record: AssessmentRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a") as f:
            f.write(record.model_dump_json() + "\n")
        logger.debug("Wrote assessment %s to %s", record.assessment_id, self.path)

    def read(self) -> list[AssessmentRecord]:
        """Read back every record written to the file."""
        if not self.path.exists():
            return []
        return [AssessmentRecord.model_validate(data) for data in read_jsonl(self.path)]


class MemoryResultSink:
    """Keeps records in memory."""

    def __init__(self) -> None:
        self.records: list[AssessmentRecord] = []

    def write(self, record: AssessmentRecord) -> None:
        self.records.append(record)


def latest_record(
    records: Iterable[AssessmentRecord],
    user_id: str,
) -> AssessmentRecord | None:
    """Return the most recently completed record for a user, if any."""
    candidates = [r for r in records if r.user_id == user_id]
    if not candidates:
        return None
    return max(candidates, key=lambda r: r.completed_datetime)
