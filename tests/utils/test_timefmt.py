import pytest

from jsrcli.utils.timefmt import DAY, HOUR, MINUTE, SECOND, WEEK, YEAR, pretty_time, time_ago


@pytest.mark.parametrize(
    "diff,expected",
    [
        (250, "250ms"),
        (SECOND, "1000ms"),
        (3 * SECOND + 400, "3s"),
        (2 * MINUTE + 5, "2m"),
        (5 * HOUR + 1, "5h"),
        (3 * DAY + 1, "3d"),
    ],
)
def test_pretty_time(diff, expected):
    assert pretty_time(diff) == expected


@pytest.mark.parametrize(
    "diff,expected",
    [
        (500, "just now"),
        (2 * SECOND + 1, "2 seconds ago"),
        (MINUTE + 1, "1 minute ago"),
        (3 * HOUR + 1, "3 hours ago"),
        (WEEK + 1, "1 week ago"),
        (2 * YEAR + 1, "2 years ago"),
    ],
)
def test_time_ago(diff, expected):
    assert time_ago(diff) == expected
