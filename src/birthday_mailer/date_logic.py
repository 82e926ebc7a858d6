from __future__ import annotations

from datetime import date, timedelta

from birthday_mailer.models import MILESTONE_EVERY_DAYS, EventKind, MatchedEvent, PersonRecord


class InvalidRecordDateError(ValueError):
    pass


def _parse_part(part: str, label: str, raw: str) -> int:
    value = part.strip()
    if not value.isdigit():
        raise InvalidRecordDateError(f"Invalid {label} in date {raw!r}")
    return int(value)


def parse_record_date(value: str) -> tuple[int, int, int | None]:
    pieces = value.split("/")
    if len(pieces) < 2:
        raise InvalidRecordDateError(f"Date must be D/M or D/M/Y: {value!r}")

    day = _parse_part(pieces[0], "day", value)
    month = _parse_part(pieces[1], "month", value)

    year: int | None = None
    if len(pieces) > 2 and pieces[2].strip():
        year = _parse_part(pieces[2], "year", value) or None
    return day, month, year


def is_same_day(today: date, day: int, month: int) -> bool:
    return today.day == day and today.month == month


def advance_candidate(today: date, days: int) -> date:
    return today + timedelta(days=days)


def days_since(birth: date, today: date) -> int:
    return (today - birth).days


def is_milestone(diff_days: int, every: int = MILESTONE_EVERY_DAYS) -> bool:
    return diff_days > 0 and diff_days % every == 0


def birth_date(day: int, month: int, year: int) -> date:
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidRecordDateError(f"Invalid birth date: {day}/{month}/{year}") from exc


def evaluate(record: PersonRecord, today: date) -> list[MatchedEvent]:
    if not record.date:
        return []

    day, month, year = parse_record_date(record.date)
    events: list[MatchedEvent] = []

    if is_same_day(today, day, month):
        events.append(MatchedEvent(kind=EventKind.BIRTHDAY))

    if record.notification_before > 0:
        candidate = advance_candidate(today, record.notification_before)
        if is_same_day(candidate, day, month):
            events.append(MatchedEvent(kind=EventKind.ADVANCE, payload=record.date))

    if year is not None:
        diff_days = days_since(birth_date(day, month, year), today)
        if is_milestone(diff_days):
            events.append(MatchedEvent(kind=EventKind.MILESTONE, payload=diff_days))

    return events
