from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Sequence

from birthday_mailer.config_store import load_records
from birthday_mailer.date_logic import evaluate
from birthday_mailer.models import PersonRecord
from birthday_mailer.notifier import NotificationDispatcher
from birthday_mailer.templates import compose

LOGGER = logging.getLogger(__name__)

RecordsLoader = Callable[[], Sequence[PersonRecord]]


class ReminderService:
    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        records_loader: RecordsLoader = load_records,
        *,
        escape_html: bool = False,
    ) -> None:
        self._dispatcher = dispatcher
        self._records_loader = records_loader
        self._escape_html = escape_html

    def count_records(self) -> int:
        return len(self._records_loader())

    async def run_check(self, today: date | None = None) -> int:
        records = self._records_loader()
        if today is None:
            today = date.today()

        LOGGER.info("Running checks for %s", today.isoformat())

        sent_count = 0
        for record in records:
            try:
                sent_count += await self._check_record(record, today)
            except Exception:
                LOGGER.exception("Skipping record %r after an error", record.name)

        LOGGER.info("Sent %s emails for %s", sent_count, today.isoformat())
        return sent_count

    async def _check_record(self, record: PersonRecord, today: date) -> int:
        sent_count = 0
        for event in evaluate(record, today):
            message = compose(
                record.name,
                event.kind,
                event.payload,
                escape_html=self._escape_html,
            )
            if await self._dispatcher.dispatch(record.name, message, event.kind):
                sent_count += 1
        return sent_count
