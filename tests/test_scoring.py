"""Tests for the generic scoring engine."""

import pytest

from neuroscale.registry import ScaleCatalog, ScaleDefinition
from neuroscale.scoring import (
    IncompleteSubmissionError,
    InterpretationGapError,
    InvalidResponseError,
    ScoringEngine,
    decode_response,
)


@pytest.fixture
def sample_scale(scale_factory) -> ScaleDefinition:
    """A three item scale; the last item accepts "UN"."""
    options = [
        {"value": 0, "text": "Nada"},
        {"value": 1, "text": "Algo"},
        {"value": 2, "text": "Mucho"},
    ]
    items = [
        {"item_id": "a", "position": 1, "label": "Ítem A", "options": options},
        {"item_id": "b", "position": 2, "label": "Ítem B", "options": options},
        {
            "item_id": "c",
            "position": 3,
            "label": "Ítem C",
            "options": [*options, {"value": "UN", "text": "No evaluable"}],
        },
    ]
    bands = [
        {"min_score": 0, "max_score": 2, "label": "Bajo", "severity": "low"},
        {"min_score": 3, "max_score": 6, "label": "Alto", "severity": "high"},
    ]
    return scale_factory(items=items, bands=bands)


@pytest.fixture
def sample_engine(sample_scale: ScaleDefinition) -> ScoringEngine:
    """Engine over a catalog holding only the test scale."""
    return ScoringEngine(ScaleCatalog([sample_scale]))


class TestScoringEngine:
    """Tests for ScoringEngine."""

    def test_sum_of_points(self, sample_engine: ScoringEngine) -> None:
        """Test the total is the sum of the item points."""
        result = sample_engine.score("TEST", {"a": 1, "b": 2, "c": 1})

        assert result.total_score == 4
        assert result.interpretation == "Alto"
        assert result.severity == "high"
        assert result.scale_id == "TEST"
        assert result.scale_version == "1.0.0"
        assert result.scale_name == "Escala TEST"
        assert result.max_possible_score == 6

    def test_breakdown_follows_catalog_order(self, sample_engine: ScoringEngine) -> None:
        """Test breakdown order ignores the submission's key order."""
        result = sample_engine.score("TEST", {"c": 0, "b": 1, "a": 2})

        assert [entry.item_id for entry in result.breakdown] == ["a", "b", "c"]
        assert [entry.points for entry in result.breakdown] == [2, 1, 0]

    def test_unscoreable_is_neutral(self, sample_engine: ScoringEngine) -> None:
        """Test "UN" scores the same as 0 and is flagged."""
        with_zero = sample_engine.score("TEST", {"a": 1, "b": 1, "c": 0})
        with_un = sample_engine.score("TEST", {"a": 1, "b": 1, "c": "UN"})

        assert with_un.total_score == with_zero.total_score == 2
        assert with_un.unscoreable_items == ["c"]
        assert with_zero.unscoreable_items == []
        assert with_un.get_entry("c").response_display == "No evaluable"

    def test_deterministic(self, sample_engine: ScoringEngine) -> None:
        """Test identical inputs produce identical results."""
        responses = {"a": 2, "b": 0, "c": "UN"}
        assert sample_engine.score("TEST", responses) == sample_engine.score("TEST", responses)

    def test_result_is_frozen(self, sample_engine: ScoringEngine) -> None:
        """Test score results cannot be modified."""
        result = sample_engine.score("TEST", {"a": 0, "b": 0, "c": 0})
        with pytest.raises(Exception):
            result.total_score = 99

    def test_lookup_by_lowercase_id(self, sample_engine: ScoringEngine) -> None:
        """Test the scale id is resolved case-insensitively."""
        assert sample_engine.score("test", {"a": 0, "b": 0, "c": 0}).scale_id == "TEST"


class TestCompletenessGate:
    """Tests for the all-or-nothing completeness rule."""

    def test_missing_item(self, sample_engine: ScoringEngine) -> None:
        """Test a missing item fails the whole submission."""
        with pytest.raises(IncompleteSubmissionError) as exc_info:
            sample_engine.score("TEST", {"a": 1, "c": 1})

        assert exc_info.value.missing_item_ids == ["b"]
        assert exc_info.value.scale_id == "TEST"

    def test_missing_items_in_catalog_order(self, sample_engine: ScoringEngine) -> None:
        """Test every missing item is reported, in catalog order."""
        with pytest.raises(IncompleteSubmissionError) as exc_info:
            sample_engine.score("TEST", {})

        assert exc_info.value.missing_item_ids == ["a", "b", "c"]

    @pytest.mark.parametrize("empty", [None, ""])
    def test_empty_values_count_as_missing(self, sample_engine: ScoringEngine, empty) -> None:
        """Test None and empty strings are treated as missing."""
        with pytest.raises(IncompleteSubmissionError) as exc_info:
            sample_engine.score("TEST", {"a": 1, "b": empty, "c": 1})

        assert exc_info.value.missing_item_ids == ["b"]

    def test_missing_checked_before_invalid(self, sample_engine: ScoringEngine) -> None:
        """Test incompleteness is reported before invalid values."""
        with pytest.raises(IncompleteSubmissionError):
            sample_engine.score("TEST", {"a": 99})


class TestInvalidResponses:
    """Tests for response validation."""

    def test_out_of_range_value(self, sample_engine: ScoringEngine) -> None:
        """Test a value outside the item's options is rejected."""
        with pytest.raises(InvalidResponseError) as exc_info:
            sample_engine.score("TEST", {"a": 3, "b": 0, "c": 0})

        error = exc_info.value
        assert error.item_id == "a"
        assert error.value == 3
        assert error.allowed_values == [0, 1, 2]

    def test_unscoreable_not_allowed(self, sample_engine: ScoringEngine) -> None:
        """Test "UN" is rejected for items that do not accept it."""
        with pytest.raises(InvalidResponseError) as exc_info:
            sample_engine.score("TEST", {"a": "UN", "b": 0, "c": 0})

        assert exc_info.value.item_id == "a"

    def test_unknown_item(self, sample_engine: ScoringEngine) -> None:
        """Test response keys that are not items are rejected."""
        with pytest.raises(InvalidResponseError, match="Unknown item 'z'") as exc_info:
            sample_engine.score("TEST", {"a": 0, "b": 0, "c": 0, "z": 1})

        assert exc_info.value.item_id == "z"
        assert exc_info.value.allowed_values is None


class TestDecodeResponse:
    """Tests for decode_response."""

    @pytest.fixture
    def item(self, sample_scale: ScaleDefinition):
        return sample_scale.get_item("c")

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (2, 2),
            (2.0, 2),
            ("2", 2),
            (" 1 ", 1),
            ("UN", "UN"),
            ("un", "UN"),
            ("Mucho", 2),
            ("  algo ", 1),
            ("no evaluable", "UN"),
        ],
    )
    def test_accepted_forms(self, item, raw, expected) -> None:
        """Test the accepted wire forms of a response."""
        assert decode_response("TEST", item, raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [True, False, 1.5, "1.0", "mucho mas", [1], {"v": 1}, -1]
        + ["+1", "-0", "0_1", "\uff11", "\u0661"],
    )
    def test_rejected_forms(self, item, raw) -> None:
        """Test booleans, fractions, signed or non-ASCII numerals and unknown text are rejected."""
        with pytest.raises(InvalidResponseError):
            decode_response("TEST", item, raw)

    def test_underscore_numeral_not_read_as_allowed_value(self, engine: ScoringEngine) -> None:
        """Test "1_0" is not taken as 10 on a scale that allows 10."""
        item_ids = [
            "severe-pain",
            "daily-activities",
            "lie-down",
            "tiredness",
            "irritation",
            "concentration",
        ]

        assert engine.score("HIT-6", {item_id: "10" for item_id in item_ids}).total_score == 60
        with pytest.raises(InvalidResponseError) as exc_info:
            engine.score("HIT-6", {item_id: "1_0" for item_id in item_ids})

        assert exc_info.value.item_id == "severe-pain"


class TestInterpretationGap:
    """Tests for interpretation failures at scoring time."""

    def test_gap_raises(self, scale_factory) -> None:
        """Test an unchecked scale with a band gap fails loudly."""
        scale = scale_factory(
            bands=[
                {"min_score": 0, "max_score": 1, "label": "Bajo"},
                {"min_score": 3, "max_score": 4, "label": "Alto"},
            ]
        )
        engine = ScoringEngine(ScaleCatalog([]))

        with pytest.raises(InterpretationGapError) as exc_info:
            engine.score_scale(scale, {"item1": 1, "item2": 1})

        assert exc_info.value.score == 2
        assert exc_info.value.matched_labels == []
