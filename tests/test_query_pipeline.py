"""
Unit tests for QueryPipeline.

Tests search, filters, sorting, pagination and filter option discovery.
"""

import math
import time
import pytest
from models import Row, ViewState
from services import QueryPipeline, query_rows
from services.query_pipeline import compare_dates, unique_values
from utils.dates import timestamp_value, timestamp_values


def make_rows(count: int):
    return [
        Row(f"P{i % 3}", f"Question number {i}", f"Answer {i}", "2024-01-01", "web")
        for i in range(count)
    ]


@pytest.fixture
def pipeline():
    return QueryPipeline()


class TestSearch:
    """Test free-text search."""

    def test_case_insensitive_on_question(self):
        rows = [
            Row("P1", "Solana staking yield", "Answer", "2024-01-01", "web"),
            Row("P2", "Ethereum gas fees", "Answer", "2024-01-01", "web"),
        ]
        page, total = query_rows(rows, ViewState(search="SOLANA"))

        assert total == 1
        assert page[0].project_id == "P1"

    def test_matches_output(self):
        rows = [Row("P1", "Which chain?", "Solana is fast", "2024-01-01", "web")]
        page, total = query_rows(rows, ViewState(search="solana"))

        assert total == 1

    def test_does_not_search_other_fields(self):
        """Test a term present only in source or proj_id does not match."""
        rows = [Row("solana-1", "Which chain?", "A fast one", "2024-01-01", "solana.com")]
        page, total = query_rows(rows, ViewState(search="solana"))

        assert total == 0
        assert page == []

    def test_empty_search_keeps_all(self, pipeline):
        rows = make_rows(5)
        assert pipeline.search(rows, "") == rows


class TestFilters:
    """Test project and source filters."""

    def test_project_filter_exact(self):
        rows = [
            Row("P1", "Question text", "A", "2024-01-01", "web"),
            Row("p1", "Question text", "A", "2024-01-01", "web"),
            Row("P10", "Question text", "A", "2024-01-01", "web"),
        ]
        page, total = query_rows(rows, ViewState(project_filter="P1"))

        assert total == 1
        assert page[0].project_id == "P1"

    def test_source_filter_exact(self):
        rows = [
            Row("P1", "Question text", "A", "2024-01-01", "web"),
            Row("P1", "Question text", "A", "2024-01-01", "api"),
        ]
        page, total = query_rows(rows, ViewState(source_filter="api"))

        assert total == 1
        assert page[0].source == "api"

    def test_search_and_filters_combine(self):
        rows = [
            Row("P1", "Solana staking", "A", "2024-01-01", "web"),
            Row("P1", "Solana fees", "A", "2024-01-01", "api"),
            Row("P2", "Solana staking", "A", "2024-01-01", "web"),
            Row("P1", "Ethereum staking", "A", "2024-01-01", "web"),
        ]
        page, total = query_rows(
            rows, ViewState(search="solana", project_filter="P1", source_filter="web")
        )

        assert total == 1
        assert page[0].question == "Solana staking"


class TestSort:
    """Test sorting."""

    def test_text_ascending_ignores_case(self):
        rows = [
            Row("banana", "Question text", "A", "", ""),
            Row("Apple", "Question text", "A", "", ""),
            Row("cherry", "Question text", "A", "", ""),
        ]
        page, _ = query_rows(rows, ViewState(sort_field="proj_id", sort_direction="asc"))

        assert [row.project_id for row in page] == ["Apple", "banana", "cherry"]

    def test_text_descending(self):
        rows = [
            Row("banana", "Question text", "A", "", ""),
            Row("Apple", "Question text", "A", "", ""),
            Row("cherry", "Question text", "A", "", ""),
        ]
        page, _ = query_rows(rows, ViewState(sort_field="proj_id", sort_direction="desc"))

        assert [row.project_id for row in page] == ["cherry", "banana", "Apple"]

    def test_accents_sort_with_base_letter(self):
        rows = [Row("f", "", "", "", ""), Row("é", "", "", "", ""), Row("d", "", "", "", "")]
        page, _ = query_rows(rows, ViewState(sort_field="proj_id", sort_direction="asc"))

        assert [row.project_id for row in page] == ["d", "é", "f"]

    def test_sort_is_stable(self):
        """Test rows with equal keys keep their original order."""
        rows = [
            Row("P2", "first", "", "", ""),
            Row("P1", "second", "", "", ""),
            Row("P2", "third", "", "", ""),
            Row("P1", "fourth", "", "", ""),
        ]
        ascending, _ = query_rows(rows, ViewState(sort_field="proj_id", sort_direction="asc"))
        descending, _ = query_rows(rows, ViewState(sort_field="proj_id", sort_direction="desc"))

        assert [row.question for row in ascending] == ["second", "fourth", "first", "third"]
        assert [row.question for row in descending] == ["first", "third", "second", "fourth"]

    def test_dates_sort_chronologically(self):
        rows = [
            Row("P1", "march", "", "2024-03-01", ""),
            Row("P1", "january", "", "Jan 1, 2024", ""),
            Row("P1", "february", "", "2024-02-01T08:00:00", ""),
        ]
        ascending, _ = query_rows(rows, ViewState(sort_field="updated", sort_direction="asc"))
        descending, _ = query_rows(rows, ViewState(sort_field="updated", sort_direction="desc"))

        assert [row.question for row in ascending] == ["january", "february", "march"]
        assert [row.question for row in descending] == ["march", "february", "january"]

    def test_invalid_dates_compare_equal(self):
        assert compare_dates("garbage", "2024-01-01") == 0
        assert compare_dates("2024-01-01", "") == 0
        assert compare_dates("2024-01-01", "2024-01-02") == -1

    def test_all_invalid_dates_keep_order(self):
        rows = [Row("P1", str(i), "", "unknown", "") for i in range(5)]
        page, _ = query_rows(rows, ViewState(sort_field="updated", sort_direction="desc"))

        assert [row.question for row in page] == ["0", "1", "2", "3", "4"]

    def test_no_sort_without_direction(self):
        rows = [Row("b", "", "", "", ""), Row("a", "", "", "", "")]
        page, _ = query_rows(rows, ViewState(sort_field="proj_id"))

        assert [row.project_id for row in page] == ["b", "a"]


class TestPagination:
    """Test page slicing."""

    def test_page_boundaries(self):
        rows = make_rows(45)

        first, total = query_rows(rows, ViewState(page=1))
        third, _ = query_rows(rows, ViewState(page=3))
        fourth, _ = query_rows(rows, ViewState(page=4))

        assert total == 45
        assert first == rows[0:20]
        assert third == rows[40:45]
        assert len(third) == 5
        assert fourth == []

    def test_query_result_pages(self, pipeline):
        result = pipeline.query(make_rows(45), ViewState(page=2))

        assert result.filtered_total == 45
        assert result.total_pages == 3
        assert result.page == 2
        assert len(result.rows) == 20

    def test_custom_page_size(self, pipeline):
        result = pipeline.query(make_rows(10), ViewState(page=2, page_size=4))

        assert [row.question for row in result.rows] == [
            "Question number 4", "Question number 5", "Question number 6", "Question number 7"
        ]

    def test_no_matches(self, pipeline):
        result = pipeline.query(make_rows(10), ViewState(search="nothing matches"))

        assert result.rows == []
        assert result.filtered_total == 0
        assert result.total_pages == 0


class TestIdempotence:
    """Test queries do not mutate their input."""

    def test_same_view_same_result(self):
        rows = make_rows(30)
        original = list(rows)
        view_state = ViewState(search="question", sort_field="proj_id", sort_direction="desc", page=2)

        assert query_rows(rows, view_state) == query_rows(rows, view_state)
        assert rows == original


class TestUniqueValues:
    """Test filter option discovery."""

    def test_first_appearance_order_without_empties(self):
        rows = [
            Row("P2", "", "", "", "web"),
            Row("", "", "", "", "api"),
            Row("P1", "", "", "", "web"),
            Row("P2", "", "", "", ""),
        ]

        assert unique_values(rows, "proj_id") == ["P2", "P1"]
        assert unique_values(rows, "source") == ["web", "api"]


class TestLargeDateSort:
    """Test sorting large files by date stays fast and correct."""

    def test_sort_thousands_of_rows_by_date(self, pipeline):
        rows = [
            Row("P1", f"Question number {i}", "Answer", f"2024-{(i % 12) + 1:02d}-{(i % 28) + 1:02d}T{i % 24:02d}:00:00", "web")
            for i in range(5000)
        ]
        view_state = ViewState(sort_field="updated", sort_direction="asc")

        start = time.perf_counter()
        result = pipeline.query(rows, view_state)
        elapsed = time.perf_counter() - start

        assert elapsed < 5.0
        assert result.filtered_total == 5000
        ordered = pipeline.filter_rows(rows, view_state)
        stamps = [timestamp_value(row.updated_at) for row in ordered[:200]]
        assert stamps == sorted(stamps)

    def test_match_does_not_sort(self, pipeline):
        rows = [Row("P1", "b", "", "", ""), Row("P1", "a", "", "", "")]
        view_state = ViewState(sort_field="question", sort_direction="asc")

        assert pipeline.match(rows, view_state) == rows
        assert [row.question for row in pipeline.filter_rows(rows, view_state)] == ["a", "b"]

    def test_page_of_filtered_rows(self, pipeline):
        rows = make_rows(45)
        filtered = pipeline.filter_rows(rows, ViewState(search="question"))

        result = pipeline.page_of(filtered, ViewState(page=3))

        assert result.rows == rows[40:45]
        assert result.filtered_total == 45
        assert result.total_pages == 3


class TestTimestampValues:
    """Test column-wise timestamp parsing agrees with single values."""

    def test_matches_single_value_parse(self):
        values = [
            "2024-01-15", "Jan 1, 2024", "2024-02-01T08:00:00",
            "2024-01-01T00:00:00+02:00", "garbage", "", "   ",
        ]

        batch = timestamp_values(values)
        single = [timestamp_value(value) for value in values]

        for got, expected in zip(batch, single):
            if math.isnan(expected):
                assert math.isnan(got)
            else:
                assert got == expected

    def test_empty_column(self):
        assert timestamp_values([]) == []
