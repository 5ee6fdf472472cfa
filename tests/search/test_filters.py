"""Tests for advanced filters and sorting."""

from kbase.core.models import ContentType, Record
from kbase.search.filters import (
    DateRange,
    SearchFilters,
    SortConfig,
    SortDirection,
    SortField,
    apply_filters,
    sort_records,
)


def _ids(records):
    return [record.id for record in records]


class TestSearchFilters:
    """Filter state."""

    def test_defaults(self):
        """A fresh filter set restricts nothing."""
        filters = SearchFilters()

        assert filters.content_types == []
        assert filters.tags == []
        assert filters.date_range is None
        assert filters.active_count == 0

    def test_active_count(self):
        """Each non-empty group counts once."""
        filters = SearchFilters(
            content_types=[ContentType.NOTE, ContentType.VIDEO],
            tags=["react"],
            date_range=DateRange(start="2024-01-01"),
        )

        assert filters.active_count == 3

    def test_open_range_not_counted(self):
        """A range without bounds is inactive."""
        filters = SearchFilters(date_range=DateRange())

        assert filters.date_range.is_open
        assert filters.active_count == 0


class TestApplyFilters:
    """Filtering records."""

    def test_no_filters(self, sample_records):
        """Empty filters keep everything in order."""
        assert apply_filters(sample_records, SearchFilters()) == sample_records

    def test_content_types(self, sample_records):
        """Any selected content type is accepted."""
        filters = SearchFilters(content_types=[ContentType.VIDEO, ContentType.NOTE])

        assert _ids(apply_filters(sample_records, filters)) == ["react", "typescript"]

    def test_tags_case_insensitive(self, sample_records):
        """Tag filters match part of a tag, ignoring case."""
        assert _ids(apply_filters(sample_records, SearchFilters(tags=["FRONT"]))) == [
            "react",
            "typescript",
        ]

    def test_tags_any(self, sample_records):
        """Any listed tag may match."""
        filters = SearchFilters(tags=["python", "design"])

        assert _ids(apply_filters(sample_records, filters)) == ["design", "packaging"]

    def test_date_start(self, sample_records):
        """Records created before the start are removed."""
        filters = SearchFilters(date_range=DateRange(start="2024-01-01"))

        assert _ids(apply_filters(sample_records, filters)) == ["react", "typescript"]

    def test_date_end_inclusive(self, sample_records):
        """The end bound includes its exact instant."""
        filters = SearchFilters(date_range=DateRange(end="2024-06-01T00:00:00Z"))

        assert _ids(apply_filters(sample_records, filters)) == [
            "react",
            "design",
            "typescript",
            "packaging",
        ]

    def test_date_window(self, sample_records):
        """Both bounds together."""
        filters = SearchFilters(
            date_range=DateRange(start="2023-01-01", end="2024-04-01")
        )

        assert _ids(apply_filters(sample_records, filters)) == ["react", "design"]

    def test_unparsable_bound_ignored(self, sample_records):
        """A bound that is not a date does not restrict."""
        filters = SearchFilters(date_range=DateRange(start="soon"))

        assert apply_filters(sample_records, filters) == sample_records

    def test_groups_combine(self, sample_records):
        """All groups must pass."""
        filters = SearchFilters(
            content_types=[ContentType.NOTE, ContentType.VIDEO],
            tags=["frontend"],
            date_range=DateRange(start="2024-05-01"),
        )

        assert _ids(apply_filters(sample_records, filters)) == ["typescript"]


class TestSortRecords:
    """Sorting results."""

    def test_default_updated_desc(self, sample_records):
        """Most recently updated first by default."""
        assert _ids(sort_records(sample_records)) == [
            "typescript",
            "react",
            "design",
            "packaging",
        ]

    def test_created_asc(self, sample_records):
        """Oldest first."""
        sort = SortConfig(SortField.CREATED_AT, SortDirection.ASC)

        assert _ids(sort_records(sample_records, sort)) == [
            "packaging",
            "design",
            "react",
            "typescript",
        ]

    def test_title_case_insensitive(self):
        """Titles compare without case."""
        records = [
            Record(id="b", title="beta", content_type=ContentType.NOTE),
            Record(id="a", title="Alpha", content_type=ContentType.NOTE),
        ]
        sort = SortConfig(SortField.TITLE, SortDirection.ASC)

        assert _ids(sort_records(records, sort)) == ["a", "b"]

    def test_content_type(self, sample_records):
        """Content types sort by their value."""
        sort = SortConfig(SortField.CONTENT_TYPE, SortDirection.ASC)

        assert _ids(sort_records(sample_records, sort)) == [
            "design",
            "packaging",
            "react",
            "typescript",
        ]

    def test_stable(self):
        """Equal keys keep input order in both directions."""
        records = [
            Record(id=str(i), title="Same", content_type=ContentType.NOTE)
            for i in range(3)
        ]

        for direction in SortDirection:
            sort = SortConfig(SortField.TITLE, direction)
            assert _ids(sort_records(records, sort)) == ["0", "1", "2"]

    def test_returns_new_list(self, sample_records):
        """The input is not reordered in place."""
        before = list(sample_records)
        sort_records(sample_records, SortConfig(SortField.TITLE))

        assert sample_records == before
