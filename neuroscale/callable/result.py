"""Result model returned by execute()."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from neuroscale.diagnostics import DiagnosticError, ProcessingStatus
from neuroscale.pipeline import ProcessingResult
from neuroscale.rendering import render_text


class SubmissionFailure(BaseModel):
    """A submission that could not be scored."""

    submission_id: str
    errors: list[DiagnosticError]


class BatchStats(BaseModel):
    """Counts for one execute() call."""

    input: int = 0
    output: int = 0
    partial: int = 0
    errors: int = 0
    failures: list[SubmissionFailure] = Field(default_factory=list)


class CallableResult(BaseModel):
    """Scored records and batch statistics.

    Attributes:
        schema_version: Version of the result layout.
        items: One flat record per scored submission, in input order.
        stats: Input, output, partial and failed counts, plus the errors of
            each failed submission.
    """

    schema_version: str = "1.0"
    items: list[dict[str, Any]]
    stats: BatchStats = Field(default_factory=BatchStats)

    model_config = {"extra": "forbid"}

    @classmethod
    def from_results(
        cls, results: Iterable[ProcessingResult], include_text: bool = False
    ) -> CallableResult:
        """Build the result from pipeline output.

        Failed submissions are left out of `items` and listed under
        `stats.failures`.
        """
        stats = BatchStats()
        records: list[dict[str, Any]] = []

        for processed in results:
            stats.input += 1
            if processed.result is None:
                stats.failures.append(
                    SubmissionFailure(
                        submission_id=processed.submission_id,
                        errors=processed.diagnostics.errors,
                    )
                )
                continue

            record = processed.to_record()
            if include_text:
                record["text"] = render_text(processed.result)
            records.append(record)
            if processed.diagnostics.status == ProcessingStatus.PARTIAL:
                stats.partial += 1

        stats.output = len(records)
        stats.errors = len(stats.failures)
        return cls(items=records, stats=stats)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON types; `failures` only when non-empty."""
        data = self.model_dump(mode="json")
        if not self.stats.failures:
            del data["stats"]["failures"]
        return data
