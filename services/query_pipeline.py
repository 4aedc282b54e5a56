"""
QueryPipeline for the data preview table.

Applies search, project/source filters, sorting and pagination to a row
sequence. Stateless: every call takes the rows and a ViewState.
"""

import functools
import math
import unicodedata
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from models import Row, ViewState
from models.view_state import SORT_DESC
from utils.dates import timestamp_value, timestamp_values
from utils.performance import monitor_performance


DATE_COLUMN = "updated"


@dataclass
class QueryResult:
    """
    One page of a filtered, sorted row set.

    Attributes:
        rows: Rows on the requested page
        filtered_total: Rows matching search and filters, before paging
        total_pages: Page count for filtered_total (0 when nothing matches)
        page: Page that was requested
    """

    rows: List[Row] = field(default_factory=list)
    filtered_total: int = 0
    total_pages: int = 0
    page: int = 1


def total_pages(filtered_total: int, page_size: int) -> int:
    return math.ceil(filtered_total / page_size)


def collation_key(value: str) -> Tuple[str, str]:
    """
    Locale-style sort key: accents and case are ignored first, the raw
    string breaks remaining ties.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value


def compare_text(a: str, b: str) -> int:
    return compare_keys(collation_key(a), collation_key(b))


def compare_timestamps(a: float, b: float) -> int:
    """
    Compare two timestamp values.

    Any comparison involving NaN (an unparseable date) reports equality, so
    the order of invalid dates relative to others is not total.
    """
    diff = a - b
    if math.isnan(diff) or diff == 0:
        return 0
    return 1 if diff > 0 else -1


def compare_dates(a: str, b: str) -> int:
    """Compare two raw date strings by timestamp."""
    return compare_timestamps(timestamp_value(a), timestamp_value(b))


def compare_keys(a: Tuple[str, str], b: Tuple[str, str]) -> int:
    return (a > b) - (a < b)


def unique_values(rows: Sequence[Row], column: str) -> List[str]:
    """
    Distinct non-empty values of a column in first-appearance order.

    Args:
        rows: Row sequence
        column: Column name

    Returns:
        Values for a filter dropdown
    """
    seen = set()
    values = []
    for row in rows:
        value = row.get(column)
        if value and value not in seen:
            seen.add(value)
            values.append(value)
    return values


class QueryPipeline:
    """
    Search -> project filter -> source filter -> sort -> paginate.
    """

    def search(self, rows: Sequence[Row], text: str) -> List[Row]:
        """Keep rows whose question or output contains text, ignoring case."""
        if not text:
            return list(rows)
        needle = text.lower()
        return [
            row for row in rows
            if needle in row.question.lower() or needle in row.output.lower()
        ]

    def filter_exact(self, rows: Sequence[Row], column: str, value) -> List[Row]:
        if not value:
            return list(rows)
        return [row for row in rows if row.get(column) == value]

    def sort(self, rows: Sequence[Row], column: str, direction: str) -> List[Row]:
        """
        Sort rows by a column.

        The date column compares parsed timestamps; other columns use
        collation_key ordering. Equal keys keep their input order. Keys are
        computed once per row, the comparator only looks them up.
        """
        values = [row.get(column) for row in rows]
        if column == DATE_COLUMN:
            keys = timestamp_values(values)
            compare = compare_timestamps
        else:
            keys = [collation_key(value) for value in values]
            compare = compare_keys

        sign = -1 if direction == SORT_DESC else 1

        def compare_positions(i: int, j: int) -> int:
            return sign * compare(keys[i], keys[j])

        order = sorted(range(len(rows)), key=functools.cmp_to_key(compare_positions))
        return [rows[i] for i in order]

    def paginate(self, rows: Sequence[Row], page: int, page_size: int) -> List[Row]:
        start = (page - 1) * page_size
        return list(rows[start:start + page_size])

    def match(self, rows: Sequence[Row], view_state: ViewState) -> List[Row]:
        """Apply search and filters only."""
        matched = self.search(rows, view_state.search)
        matched = self.filter_exact(matched, "proj_id", view_state.project_filter)
        return self.filter_exact(matched, "source", view_state.source_filter)

    @monitor_performance("filter_rows")
    def filter_rows(self, rows: Sequence[Row], view_state: ViewState) -> List[Row]:
        """Apply search, filters and sort, without paging."""
        filtered = self.match(rows, view_state)

        if view_state.is_sorted:
            filtered = self.sort(filtered, view_state.sort_field, view_state.sort_direction)

        return filtered

    def page_of(self, filtered: Sequence[Row], view_state: ViewState) -> QueryResult:
        """
        Cut the requested page out of rows already passed through filter_rows.

        Args:
            filtered: Searched, filtered and sorted rows
            view_state: View whose page and page size apply

        Returns:
            QueryResult for the requested page (empty if the page is out of range)
        """
        return QueryResult(
            rows=self.paginate(filtered, view_state.page, view_state.page_size),
            filtered_total=len(filtered),
            total_pages=total_pages(len(filtered), view_state.page_size),
            page=view_state.page,
        )

    @monitor_performance("query")
    def query(self, rows: Sequence[Row], view_state: ViewState) -> QueryResult:
        """
        Run the full pipeline.

        Args:
            rows: Rows of the selected file
            view_state: Search, filter, sort and page parameters

        Returns:
            QueryResult for the requested page (empty if the page is out of range)
        """
        return self.page_of(self.filter_rows(rows, view_state), view_state)


def query_rows(rows: Sequence[Row], view_state: ViewState) -> Tuple[List[Row], int]:
    """
    Run the query pipeline and return (page_rows, filtered_total).
    """
    result = QueryPipeline().query(rows, view_state)
    return result.rows, result.filtered_total
