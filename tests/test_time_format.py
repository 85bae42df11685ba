from __future__ import annotations

import pytest

from exam_app.utils.time_format import format_clock, format_duration, option_letter


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00"), (9, "0:09"), (599, "9:59"), (3600, "1:00:00"), (3 * 3600 + 62, "3:01:02"), (-4, "0:00")],
)
def test_format_clock(seconds, expected):
    assert format_clock(seconds) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (45, "45s"), (305, "5m 5s"), (3723, "1h 2m 3s")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_option_letter():
    assert [option_letter(i) for i in range(4)] == ["A", "B", "C", "D"]
