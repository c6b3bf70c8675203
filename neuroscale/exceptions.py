"""Exceptions raised while scoring a response set."""

from typing import Any


class ScoringError(Exception):
    """Raised when scoring fails."""

    def __init__(self, scale_id: str, message: str) -> None:
        self.scale_id = scale_id
        super().__init__(message)


class IncompleteSubmissionError(ScoringError):
    """Raised when one or more items have no response.

    Scoring is all-or-nothing: an incomplete submission is never partially
    scored.
    """

    def __init__(self, scale_id: str, missing_item_ids: list[str]) -> None:
        self.missing_item_ids = list(missing_item_ids)
        super().__init__(
            scale_id,
            f"Incomplete submission for {scale_id}: "
            f"{len(self.missing_item_ids)} item(s) without response: "
            f"{', '.join(self.missing_item_ids)}",
        )


class InvalidResponseError(ScoringError):
    """Raised when a response is not one of the item's allowed values."""

    def __init__(
        self,
        scale_id: str,
        item_id: str,
        value: Any,
        allowed_values: list[Any] | None = None,
    ) -> None:
        self.item_id = item_id
        self.value = value
        self.allowed_values = allowed_values
        if allowed_values is None:
            message = f"Unknown item {item_id!r} for {scale_id} (value {value!r})"
        else:
            message = (
                f"Invalid response {value!r} for item {item_id} of {scale_id}. "
                f"Allowed values: {allowed_values}"
            )
        super().__init__(scale_id, message)


class InterpretationGapError(ScoringError):
    """Raised when a total score does not match exactly one interpretation band.

    This indicates a defect in the scale specification, not in the input.
    """

    def __init__(self, scale_id: str, score: int, matched_labels: list[str]) -> None:
        self.score = score
        self.matched_labels = list(matched_labels)
        if matched_labels:
            detail = f"matches {len(matched_labels)} bands: {matched_labels}"
        else:
            detail = "matches no interpretation band"
        super().__init__(scale_id, f"Score {score} of {scale_id} {detail}")
