"""Tests for API request schemas."""

import pytest

from SmartCombo.api.schemas import SuggestionRequest, parse_invariant_float, parse_invariant_int


class TestInvariantParsing:
    """Test locale-independent number parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("0.5", 0.5),
        ("-0.25", -0.25),
        ("+1", 1.0),
        (".75", 0.75),
        ("1e-1", 0.1),
        ("  0.3 ", 0.3),
    ])
    def test_valid_floats(self, text, expected):
        """Dot-decimal numbers parse."""
        assert parse_invariant_float(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["0,5", "1,000.5", "nan", "inf", "abc", "0.5.1"])
    def test_invalid_floats(self, text):
        """Comma decimals and non-finite values are rejected."""
        with pytest.raises(ValueError):
            parse_invariant_float(text)

    def test_empty_float_is_missing(self):
        """An empty field means not provided."""
        assert parse_invariant_float("") is None
        assert parse_invariant_float(None) is None

    def test_numeric_passthrough(self):
        """Numbers from JSON bodies are accepted as-is."""
        assert parse_invariant_float(1) == 1.0
        assert parse_invariant_int(7) == 7

    def test_bool_rejected(self):
        """Booleans are not numbers."""
        with pytest.raises(ValueError):
            parse_invariant_float(True)
        with pytest.raises(ValueError):
            parse_invariant_int(False)

    def test_int_parsing(self):
        """Integers must be plain digits."""
        assert parse_invariant_int(" 12 ") == 12
        assert parse_invariant_int("") is None
        with pytest.raises(ValueError):
            parse_invariant_int("1.5")
        with pytest.raises(ValueError):
            parse_invariant_int("1,000")


class TestSuggestionRequest:
    """Test suggestion request schema."""

    def test_aliases(self):
        """Fields are read under their camelCase wire names."""
        req = SuggestionRequest(**{"searchText": "rent", "maxResults": "5", "minSimilarity": "0.5"})
        assert req.search_text == "rent"
        assert req.max_results == 5
        assert req.min_similarity == 0.5

    def test_field_names(self):
        """Python field names are accepted too."""
        req = SuggestionRequest(search_text="gas", max_results=2)
        assert req.search_text == "gas"
        assert req.max_results == 2
        assert req.min_similarity is None

    def test_defaults(self):
        """Everything is optional."""
        req = SuggestionRequest()
        assert req.search_text == ""
        assert req.max_results is None
        assert req.min_similarity is None

    def test_search_text_stripped(self):
        """Search text is trimmed."""
        assert SuggestionRequest(searchText="  rent  ").search_text == "rent"

    def test_comma_decimal_rejected(self):
        """Locale-specific decimals are a validation error."""
        with pytest.raises(ValueError):
            SuggestionRequest(searchText="rent", minSimilarity="0,5")

    def test_max_results_must_be_positive(self):
        """maxResults must be at least 1."""
        with pytest.raises(ValueError):
            SuggestionRequest(searchText="rent", maxResults="0")

    def test_max_results_has_no_fixed_upper_bound(self):
        """The upper cap comes from settings, not the schema."""
        assert SuggestionRequest(searchText="rent", maxResults="500").max_results == 500

    def test_min_similarity_bounds(self):
        """minSimilarity must be a cosine score."""
        with pytest.raises(ValueError):
            SuggestionRequest(searchText="rent", minSimilarity="1.5")

    def test_unknown_fields_ignored(self):
        """Extra form fields do not fail validation."""
        req = SuggestionRequest(**{"searchText": "rent", "__RequestVerificationToken": "abc"})
        assert req.search_text == "rent"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
