"""Tests for response set validation checks."""

from neuroscale.validation import find_missing_items, find_unknown_items


class TestFindMissingItems:
    """Tests for find_missing_items."""

    def test_complete(self, nihss, nihss_zero: dict) -> None:
        """Test a complete response set has no missing items."""
        assert find_missing_items(nihss, nihss_zero) == []

    def test_absent_none_and_empty(self, nihss, nihss_zero: dict) -> None:
        """Test absent keys, None and empty strings are missing."""
        responses = {**nihss_zero, "gaze": None, "neglect": ""}
        del responses["loc"]

        assert find_missing_items(nihss, responses) == ["loc", "gaze", "neglect"]

    def test_zero_is_present(self, nihss, nihss_zero: dict) -> None:
        """Test 0 and "0" are valid answers, not missing."""
        responses = {**nihss_zero, "loc": "0"}
        assert find_missing_items(nihss, responses) == []


class TestFindUnknownItems:
    """Tests for find_unknown_items."""

    def test_no_unknown(self, nihss, nihss_zero: dict) -> None:
        """Test known keys pass."""
        assert find_unknown_items(nihss, nihss_zero) == []

    def test_unknown_keys(self, nihss, nihss_zero: dict) -> None:
        """Test extra keys are reported in submission order."""
        responses = {**nihss_zero, "extra": 1, "LOC": 0}
        assert find_unknown_items(nihss, responses) == ["extra", "LOC"]
