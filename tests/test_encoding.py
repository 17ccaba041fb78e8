from datetime import date, datetime, timedelta, timezone

import pytest
from backlog_client.custom_fields import CustomFieldTypeId, InitialDateType
from backlog_client.dates import (
    format_timestamp,
    parse_calendar_date,
    since_bound,
    until_bound,
)
from backlog_client.encoding import ParamList, clamp_count, encode_value
from backlog_client.errors import InvalidDateError
from backlog_client.models import StatusColor
from backlog_client.request import HttpMethod, SortOrder


def test_scalar_rendering():
    assert encode_value(True) == "true"
    assert encode_value(False) == "false"
    assert encode_value(42) == "42"
    assert encode_value(100.0) == "100"
    assert encode_value(1.5) == "1.5"
    assert encode_value("a b") == "a b"


def test_enum_rendering():
    assert encode_value(SortOrder.DESC) == "desc"
    assert encode_value(StatusColor.RED) == "#ea2c00"
    assert encode_value(CustomFieldTypeId.SINGLE_LIST) == "5"
    assert encode_value(InitialDateType.SPECIFIED) == "4"


def test_date_rendering():
    assert encode_value(date(2024, 3, 14)) == "2024-03-14"
    assert (
        encode_value(datetime(2024, 3, 14, tzinfo=timezone.utc))
        == "2024-03-14T00:00:00Z"
    )
    jst = timezone(timedelta(hours=9))
    assert format_timestamp(datetime(2024, 3, 14, 10, 0, tzinfo=jst)) == (
        "2024-03-14T01:00:00Z"
    )


def test_param_list_skips_none_and_repeats_arrays():
    pairs = (
        ParamList()
        .add("keyword", None)
        .add("keyword", "bug")
        .add_array("statusId", [1, 2, 3])
        .add_array("categoryId", None)
        .add_array("issueTypeId", [])
        .pairs()
    )
    assert pairs == [
        ("keyword", "bug"),
        ("statusId[]", "1"),
        ("statusId[]", "2"),
        ("statusId[]", "3"),
    ]


def test_clamp_count():
    assert clamp_count(0) == 1
    assert clamp_count(-5) == 1
    assert clamp_count(50) == 50
    assert clamp_count(500) == 100


def test_day_boundaries():
    assert since_bound("2024-03-14") == datetime(2024, 3, 14, 0, 0, 0, tzinfo=timezone.utc)
    assert until_bound("2024-03-14") == datetime(
        2024, 3, 14, 23, 59, 59, tzinfo=timezone.utc
    )
    assert until_bound(date(2024, 3, 14)).hour == 23
    # explicit times are kept
    assert since_bound("2024-03-14T12:30:00Z").hour == 12


def test_calendar_date_parsing():
    assert parse_calendar_date("2024-03-14") == date(2024, 3, 14)
    assert parse_calendar_date("2024-03-14T00:00:00Z") == date(2024, 3, 14)
    assert parse_calendar_date(datetime(2024, 3, 14, 5, tzinfo=timezone.utc)) == date(
        2024, 3, 14
    )

    for bad in ("2024-13-01", "14/03/2024", "soon"):
        with pytest.raises(InvalidDateError):
            parse_calendar_date(bad)
    with pytest.raises(InvalidDateError):
        parse_calendar_date(20240314)


def test_http_method_body_flag():
    assert HttpMethod.POST.has_body
    assert HttpMethod.PATCH.has_body
    assert not HttpMethod.GET.has_body
    assert not HttpMethod.DELETE.has_body
