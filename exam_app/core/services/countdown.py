"""Days-until-exam countdown over predefined and user-defined exam dates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import uuid4

from exam_app.core.models import CountdownRemaining, CountdownSettings, CustomExam


@dataclass(frozen=True, slots=True)
class ScheduledExam:
    """An exam date the countdown can target."""

    id: str
    name: str
    date: str
    time: str | None = None
    is_predefined: bool = False

    def target(self) -> datetime:
        """Local wall-clock instant of the exam; missing time means midnight."""
        year, month, day = (int(part) for part in self.date.split("-"))
        hours, minutes = (int(part) for part in (self.time or "00:00").split(":"))
        return datetime(year, month, day, hours, minutes)


PREDEFINED_EXAMS: tuple[ScheduledExam, ...] = (
    ScheduledExam("neet-2025", "NEET 2025", "2025-05-04", "14:00", True),
    ScheduledExam("jee-main-2025", "JEE Main 2025", "2025-04-01", "09:00", True),
    ScheduledExam("jee-adv-2025", "JEE Advanced 2025", "2025-05-25", "09:00", True),
    ScheduledExam("cuet-2025", "CUET 2025", "2025-05-15", "09:00", True),
    ScheduledExam("upsc-prelims-2025", "UPSC Prelims 2025", "2025-05-25", "09:30", True),
    ScheduledExam("ssc-cgl-2025", "SSC CGL 2025", "2025-03-15", "09:00", True),
    ScheduledExam("ibps-po-2025", "IBPS PO 2025", "2025-10-15", "09:00", True),
)


def all_exams(settings: CountdownSettings) -> list[ScheduledExam]:
    custom = [
        ScheduledExam(exam.id, exam.name, exam.date, exam.time, is_predefined=False)
        for exam in settings.custom_exams
    ]
    return [*PREDEFINED_EXAMS, *custom]


def selected_exam(settings: CountdownSettings) -> ScheduledExam:
    """The selected exam, falling back to the first known one."""
    exams = all_exams(settings)
    for exam in exams:
        if exam.id == settings.selected_exam_id:
            return exam
    return exams[0]


def add_custom_exam(settings: CountdownSettings, name: str, date: str, time: str | None = None) -> CountdownSettings:
    """Append a custom exam and select it."""
    cleaned_name = name.strip()
    if not cleaned_name:
        raise ValueError("Exam name must not be empty.")
    probe = ScheduledExam("probe", cleaned_name, date, time or None)
    try:
        probe.target()
    except ValueError as exc:
        raise ValueError(f"Invalid exam date or time: {date} {time or ''}".strip()) from exc

    exam = CustomExam(id=f"custom-{uuid4().hex[:8]}", name=cleaned_name, date=date, time=time or None)
    return replace(
        settings,
        custom_exams=settings.custom_exams + (exam,),
        selected_exam_id=exam.id,
    )


def remove_custom_exam(settings: CountdownSettings, exam_id: str) -> CountdownSettings:
    remaining = tuple(exam for exam in settings.custom_exams if exam.id != exam_id)
    selected = settings.selected_exam_id
    if selected == exam_id:
        selected = None
    return replace(settings, custom_exams=remaining, selected_exam_id=selected)


def time_until(target: datetime, now: datetime) -> CountdownRemaining:
    diff = (target - now).total_seconds()
    if diff <= 0:
        return CountdownRemaining(days=0, hours=0, minutes=0, seconds=0, is_expired=True)

    total = int(diff)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return CountdownRemaining(days=days, hours=hours, minutes=minutes, seconds=seconds, is_expired=False)
