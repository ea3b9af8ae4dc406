"""
Tests for free-text salary parsing and range matching
"""
import pytest

from app.utils.salary import parse_salary, parse_salary_filter, salary_matches, salary_sort_key


class TestParseSalary:
    """Test salary string parsing"""

    def test_range(self):
        parsed = parse_salary("$40,000 - $50,000")
        assert parsed.min == 40000
        assert parsed.max == 50000
        assert parsed.average == 45000

    def test_single_value(self):
        parsed = parse_salary("$60000")
        assert parsed.min == parsed.max == parsed.average == 60000

    @pytest.mark.parametrize("value", ["Not specified", "not specified", "", None, "Competitive", "$40k - $50k"])
    def test_unparseable(self, value):
        assert parse_salary(value) is None

    def test_range_without_spaces_is_not_a_range(self):
        # Only " - " separates bounds
        assert parse_salary("$40,000-$50,000") is None


class TestSalaryMatches:
    """Test salary bounds against posted salaries"""

    def test_no_bounds_matches_everything(self):
        assert salary_matches("Not specified")
        assert salary_matches("$10")

    def test_min_bound_uses_posted_maximum(self):
        assert salary_matches("$40,000 - $50,000", min_salary=45000)
        assert salary_matches("$40,000 - $50,000", min_salary=50000)
        assert not salary_matches("$40,000 - $50,000", min_salary=50001)

    def test_max_bound_uses_posted_minimum(self):
        assert salary_matches("$40,000 - $50,000", max_salary=40000)
        assert not salary_matches("$40,000 - $50,000", max_salary=39999)

    def test_unknown_salary_only_survives_without_min(self):
        assert not salary_matches("Not specified", min_salary=1000)
        assert salary_matches("Not specified", max_salary=1000)

    def test_equal_bounds_need_exact_single_value(self):
        assert salary_matches("$60000", min_salary=60000, max_salary=60000)
        assert not salary_matches("$50,000 - $70,000", min_salary=60000, max_salary=60000)
        assert not salary_matches("$61000", min_salary=60000, max_salary=60000)

    def test_zero_min_is_no_lower_bound(self):
        assert salary_matches("$100", min_salary=0, max_salary=500)


class TestSalaryFilterAndSortKey:
    """Test query-string bounds and ordering key"""

    @pytest.mark.parametrize(
        "value,expected",
        [("50000", 50000), ("$50,000", 50000), ("", None), ("abc", None), ("-5", None), (None, None)],
    )
    def test_parse_salary_filter(self, value, expected):
        assert parse_salary_filter(value) == expected

    def test_sort_key(self):
        assert salary_sort_key("$40,000 - $50,000") == 45000
        assert salary_sort_key("Not specified") == 0
