"""Tests for card field marker extraction."""

from hostgrants.core.markers import extract_markers, iter_field_markers


class TestExtractMarkers:
    """Tests for extract_markers."""

    def test_single_marker(self):
        assert extract_markers("{expression}") == {"expression"}

    def test_multiple_markers_in_text(self):
        template = "<b>{expression}</b> [{reading}]<br>{glossary}"
        assert extract_markers(template) == {"expression", "reading", "glossary"}

    def test_duplicates_collapse(self):
        assert extract_markers("{clipboard-text} {clipboard-text}") == {"clipboard-text"}

    def test_hyphen_and_underscore_names(self):
        assert extract_markers("{clipboard-image}{pitch_accents}") == {"clipboard-image", "pitch_accents"}

    def test_unicode_names(self):
        assert extract_markers("{単語}") == {"単語"}

    def test_empty_marker(self):
        assert extract_markers("{}") == {""}

    def test_empty_string(self):
        assert extract_markers("") == set()

    def test_plain_text(self):
        assert extract_markers("no markers here") == set()

    def test_unbalanced_braces_do_not_match(self):
        assert extract_markers("{clipboard-text") == set()
        assert extract_markers("clipboard-text}") == set()

    def test_names_with_spaces_do_not_match(self):
        assert extract_markers("{clipboard text}") == set()

    def test_nested_braces_match_innermost(self):
        assert extract_markers("{{expression}}") == {"expression"}


class TestIterFieldMarkers:
    """Tests for iter_field_markers."""

    def test_preserves_order_and_duplicates(self):
        markers = list(iter_field_markers("{b} {a} {b}"))

        assert markers == ["b", "a", "b"]

    def test_empty_string_yields_nothing(self):
        assert list(iter_field_markers("")) == []
