"""Execute interface for the neuroscale callable protocol.

Provides the in-proc execute() function that host applications (form
handlers, assessment APIs) call directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from neuroscale.callable.result import CallableResult
from neuroscale.pipeline import Pipeline, PipelineConfig


def _as_submission(item: Any, scale_id: str | None) -> dict[str, Any]:
    """Normalize an input item into a submission dict."""
    if not isinstance(item, Mapping):
        raise ValueError("Each item must be a submission dict or a responses dict")

    if "responses" in item:
        submission = dict(item)
        if not submission.get("scale_id"):
            if not scale_id:
                raise ValueError("'scale_id' is required in params or in each submission")
            submission["scale_id"] = scale_id
        return submission

    # Bare item_id -> response mapping
    if not scale_id:
        raise ValueError("'scale_id' is required when items are bare response dicts")
    return {"scale_id": scale_id, "responses": dict(item)}


def execute(params: dict[str, Any]) -> dict[str, Any]:
    """Score submissions and return scored records.

    Args:
        params: Dictionary containing:
            - scale_id: str - Default scale id for items that carry none
            - items: list[dict] | dict - Submissions
              ({"submission_id", "scale_id", "responses"}) or bare response
              dicts (item_id -> response) when scale_id is given
            - config: dict - Optional configuration overrides:
                - scale_registry_path: str - Override scale registry path
                - approved_scale_types: list[str] - Override the allow-list
                - deterministic_ids: bool - Deterministic submission ids
                - include_text: bool - Add the rendered text block to records

    Returns:
        CallableResult dict with:
            - schema_version: "1.0"
            - items: list[dict] - Scored records
            - stats: dict - Processing statistics (and failures, if any)

    Raises:
        ValueError: If required parameters are missing or malformed.
    """
    items = params.get("items")
    if items is None:
        raise ValueError("'items' is required in params")

    scale_id = params.get("scale_id")
    config = params.get("config") or {}

    if isinstance(items, Mapping):
        items = [items]
    elif not isinstance(items, list):
        raise ValueError("'items' must be a dict or a list of dicts")

    submissions = [_as_submission(item, scale_id) for item in items]

    registry_path = config.get("scale_registry_path")
    pipeline_config = PipelineConfig(
        scale_registry_path=Path(registry_path) if registry_path else None,
        approved_scale_types=config.get("approved_scale_types"),
        deterministic_ids=config.get("deterministic_ids", False),
    )
    results = Pipeline(pipeline_config).process_batch(submissions)

    include_text = bool(config.get("include_text", False))
    return CallableResult.from_results(results, include_text=include_text).to_dict()
