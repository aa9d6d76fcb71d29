"""
Unit tests for the paginated CSV preview.
"""

import pytest

from src.batch.preview import MAX_PREVIEW_LIMIT, preview_csv


def make_csv(rows: int) -> str:
    lines = ["name,city"] + [f"Business {i},City {i % 3}" for i in range(rows)]
    return "\n".join(lines) + "\n"


@pytest.mark.unit
class TestPreviewCsv:
    """Tests for preview_csv"""

    def test_first_page(self, sample_csv):
        preview = preview_csv(sample_csv, page=0, limit=2)
        assert preview.headers == ["Name", "Phone", "City", "US_State", "Rating", "Unused"]
        assert preview.data[0][0] == "Acme Plumbing, LLC"
        assert preview.data[1][0] == 'Beta "The Best" Bakery'
        assert preview.total_rows == 3
        assert preview.current_page == 0
        assert preview.has_next_page is True

    def test_last_page(self, sample_csv):
        preview = preview_csv(sample_csv, page=1, limit=2)
        assert preview.data == [["Gamma Garage", "555-3333", "Miami"]]
        assert preview.has_next_page is False

    def test_page_past_end(self):
        preview = preview_csv(make_csv(5), page=10, limit=2)
        assert preview.data == []
        assert preview.total_rows == 5
        assert preview.has_next_page is False

    def test_search_is_case_insensitive(self, sample_csv):
        preview = preview_csv(sample_csv, search="dallas")
        assert preview.total_rows == 1
        assert preview.data[0][2] == "Dallas"

    def test_search_matches_raw_line(self, sample_csv):
        """Quote characters in the raw line take part in matching"""
        preview = preview_csv(sample_csv, search='""the best""')
        assert preview.total_rows == 1

    def test_blank_search_does_not_filter(self, sample_csv):
        assert preview_csv(sample_csv, search="   ").total_rows == 3

    def test_limit_is_capped(self):
        preview = preview_csv(make_csv(MAX_PREVIEW_LIMIT + 5), limit=5000)
        assert len(preview.data) == MAX_PREVIEW_LIMIT
        assert preview.has_next_page is True

    def test_empty_text(self):
        preview = preview_csv("", page=2)
        assert preview.headers == []
        assert preview.data == []
        assert preview.total_rows == 0
        assert preview.current_page == 2

    def test_header_only(self):
        preview = preview_csv("name,city\n")
        assert preview.headers == ["name", "city"]
        assert preview.total_rows == 0
