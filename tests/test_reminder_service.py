from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pytest

from birthday_mailer.models import PersonRecord
from birthday_mailer.notifier import DeliveryConfig, NotificationDispatcher
from birthday_mailer.reminder_service import ReminderService


@dataclass
class FakeMailer:
    sent: list[dict[str, Any]] = field(default_factory=list)

    async def send_email(self, params: dict[str, Any]) -> Any:
        self.sent.append(params)
        return {"id": "ok"}


def _service(records: list[PersonRecord], mailer: FakeMailer, **kwargs: Any) -> ReminderService:
    dispatcher = NotificationDispatcher(
        DeliveryConfig(api_key="re_test", recipients=("me@example.com",), pause_seconds=0),
        mailer,
    )
    return ReminderService(dispatcher, lambda: records, **kwargs)


def test_run_check_sends_every_matching_event_in_order() -> None:
    mailer = FakeMailer()
    service = _service(
        [
            PersonRecord(name="Ana", date="15/6"),
            PersonRecord(name="Bo", date="20/6", notification_before=5),
            PersonRecord(name="Cy", date="1/1"),
        ],
        mailer,
    )

    sent = asyncio.run(service.run_check(date(2026, 6, 15)))

    assert sent == 2
    assert [params["subject"] for params in mailer.sent] == [
        "🎂 It's Ana's Birthday Today!",
        "📅 Upcoming Birthday: Bo",
    ]


def test_record_without_date_does_not_stop_batch() -> None:
    mailer = FakeMailer()
    service = _service(
        [PersonRecord(name="NoDate"), PersonRecord(name="Ana", date="15/6")],
        mailer,
    )

    assert asyncio.run(service.run_check(date(2026, 6, 15))) == 1
    assert "Ana" in mailer.sent[0]["subject"]


def test_faulty_record_is_logged_and_skipped(caplog: pytest.LogCaptureFixture) -> None:
    mailer = FakeMailer()
    service = _service(
        [
            PersonRecord(name="Bad", date="not-a-date"),
            PersonRecord(name="WrongType", date="1/1", notification_before="5"),
            PersonRecord(name="Ana", date="15/6"),
        ],
        mailer,
    )

    assert asyncio.run(service.run_check(date(2026, 6, 15))) == 1
    assert "Skipping record 'Bad'" in caplog.text
    assert "Skipping record 'WrongType'" in caplog.text


def test_run_check_logs_date_and_defaults_to_today(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("INFO")
    service = _service([], FakeMailer())

    assert asyncio.run(service.run_check()) == 0
    assert f"Running checks for {date.today().isoformat()}" in caplog.text


def test_escape_html_flows_into_messages() -> None:
    mailer = FakeMailer()
    service = _service([PersonRecord(name="<b>Bo</b>", date="15/6")], mailer, escape_html=True)

    asyncio.run(service.run_check(date(2026, 6, 15)))

    assert "&lt;b&gt;Bo&lt;/b&gt;" in mailer.sent[0]["html"]


def test_count_records_reloads_configuration() -> None:
    records = [PersonRecord(name="Ana", date="15/6")]
    service = _service(records, FakeMailer())

    assert service.count_records() == 1
    records.append(PersonRecord(name="Bo"))
    assert service.count_records() == 2
