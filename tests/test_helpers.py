"""
Tests for helper utilities and validators
"""
from datetime import datetime, timedelta

import pytest

from app.utils.constants import normalize_experience_level
from app.utils.helpers import format_relative_date, normalize_email, page_count, title_case_hyphenated
from app.utils.validators import missing_fields, validate_email, validate_phone


@pytest.mark.parametrize(
    "days,expected",
    [(0, "Today"), (1, "1 day ago"), (3, "3 days ago"), (7, "1 week ago"), (13, "1 week ago"), (21, "3 weeks ago")],
)
def test_format_relative_date(days, expected):
    now = datetime(2025, 6, 30, 12, 0, 0)
    assert format_relative_date(now - timedelta(days=days), now=now) == expected


def test_title_case_hyphenated():
    assert title_case_hyphenated("full-time") == "Full-Time"
    assert title_case_hyphenated("PART-TIME") == "Part-Time"
    assert title_case_hyphenated("contract") == "Contract"


@pytest.mark.parametrize("total,limit,expected", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (12, 5, 3)])
def test_page_count(total, limit, expected):
    assert page_count(total, limit) == expected


def test_normalize_email():
    assert normalize_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"


@pytest.mark.parametrize(
    "value,expected",
    [("Mid Level", "Mid Level"), ("mid", "Mid Level"), ("Senior", "Senior Level"), ("guru", None), ("", None)],
)
def test_normalize_experience_level(value, expected):
    assert normalize_experience_level(value) == expected


def test_missing_fields():
    data = {"title": "Dev", "salary": "  ", "skills": [], "tags": [""], "location": None}
    assert missing_fields(data, ["title", "salary", "skills", "tags", "location", "absent"]) == [
        "salary",
        "skills",
        "tags",
        "location",
        "absent",
    ]


def test_validators():
    assert validate_email("a@b.co")
    assert not validate_email("not-an-email")
    assert validate_phone("+1 555-0100")
    assert not validate_phone("12")
