from __future__ import annotations

from datetime import datetime

import pytest

from exam_app.core.models import CountdownSettings, CustomExam
from exam_app.core.services.countdown import (
    PREDEFINED_EXAMS,
    add_custom_exam,
    all_exams,
    remove_custom_exam,
    selected_exam,
    time_until,
)


def test_selection_falls_back_to_first_exam():
    assert selected_exam(CountdownSettings()) == PREDEFINED_EXAMS[0]
    assert selected_exam(CountdownSettings(selected_exam_id="missing")) == PREDEFINED_EXAMS[0]
    assert selected_exam(CountdownSettings(selected_exam_id="cuet-2025")).name == "CUET 2025"


def test_add_custom_exam_selects_it():
    settings = add_custom_exam(CountdownSettings(), "  Finals ", "2030-06-01")
    exam = settings.custom_exams[0]
    assert exam.name == "Finals"
    assert exam.id.startswith("custom-")
    assert exam.time is None
    assert settings.selected_exam_id == exam.id

    chosen = selected_exam(settings)
    assert not chosen.is_predefined
    assert chosen.target() == datetime(2030, 6, 1, 0, 0)
    assert len(all_exams(settings)) == len(PREDEFINED_EXAMS) + 1


@pytest.mark.parametrize(
    "name, date, time",
    [(" ", "2030-06-01", None), ("Finals", "2030-02-30", None), ("Finals", "2030-06-01", "25:00")],
)
def test_add_custom_exam_validation(name, date, time):
    with pytest.raises(ValueError):
        add_custom_exam(CountdownSettings(), name, date, time)


def test_remove_custom_exam_clears_selection():
    exam = CustomExam(id="custom-1", name="Finals", date="2030-06-01")
    settings = CountdownSettings(selected_exam_id="custom-1", custom_exams=(exam,))
    removed = remove_custom_exam(settings, "custom-1")
    assert removed.custom_exams == ()
    assert removed.selected_exam_id is None

    other = CountdownSettings(selected_exam_id="neet-2025", custom_exams=(exam,))
    assert remove_custom_exam(other, "custom-1").selected_exam_id == "neet-2025"


def test_time_until_breakdown():
    remaining = time_until(datetime(2030, 1, 2, 3, 4, 5), datetime(2030, 1, 1, 0, 0, 0))
    assert (remaining.days, remaining.hours, remaining.minutes, remaining.seconds) == (1, 3, 4, 5)
    assert not remaining.is_expired


def test_time_until_past_target_is_expired():
    remaining = time_until(datetime(2030, 1, 1), datetime(2030, 1, 1, 0, 0, 1))
    assert remaining.is_expired
    assert remaining.days == remaining.hours == remaining.minutes == remaining.seconds == 0
