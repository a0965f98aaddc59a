from datetime import date, datetime

import pytest

from utils.dates import format_date, parse_date
from utils.errors import ValidationError


def test_parse_api_and_iso_formats():
    assert parse_date("15-08-2004") == date(2004, 8, 15)
    assert parse_date("2004-08-15") == date(2004, 8, 15)
    assert parse_date(" 01-01-2000 ") == date(2000, 1, 1)


def test_parse_passes_dates_through():
    assert parse_date(date(2001, 2, 3)) == date(2001, 2, 3)
    assert parse_date(datetime(2001, 2, 3, 10, 30)) == date(2001, 2, 3)


def test_parse_empty_values():
    assert parse_date(None) is None
    assert parse_date("") is None
    with pytest.raises(ValidationError, match="dob is required"):
        parse_date("", "dob", required=True)


@pytest.mark.parametrize("value", ["31-02-2004", "2004/08/15", "yesterday", 20040815])
def test_parse_rejects_malformed_dates(value):
    with pytest.raises(ValidationError, match="DD-MM-YYYY"):
        parse_date(value, "dob")


def test_format_date():
    assert format_date(date(2004, 8, 5)) == "05-08-2004"
    assert format_date(datetime(2004, 8, 5, 23, 59)) == "05-08-2004"
    assert format_date(None) is None
