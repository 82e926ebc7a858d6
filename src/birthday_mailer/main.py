from __future__ import annotations

import asyncio
import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv

from birthday_mailer.notifier import DeliveryConfig, NotificationDispatcher
from birthday_mailer.reminder_service import ReminderService
from birthday_mailer.settings import Settings, load_settings
from birthday_mailer.web import create_app

LOGGER = logging.getLogger(__name__)

DAILY_JOB_ID = "daily-birthday-checks"


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_check_blocking(service: ReminderService) -> None:
    try:
        asyncio.run(service.run_check())
    except Exception:
        LOGGER.exception("Birthday check failed")


def start_background_check(service: ReminderService) -> threading.Thread:
    thread = threading.Thread(
        target=run_check_blocking,
        args=(service,),
        name="birthday-check",
        daemon=True,
    )
    thread.start()
    return thread


def build_scheduler(service: ReminderService, settings: Settings) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        run_check_blocking,
        trigger="cron",
        args=(service,),
        hour=settings.check_hour,
        minute=settings.check_minute,
        id=DAILY_JOB_ID,
        name="Daily birthday checks",
        replace_existing=True,
    )
    return scheduler


def build_service(settings: Settings) -> ReminderService:
    dispatcher = NotificationDispatcher(DeliveryConfig.from_settings(settings))
    return ReminderService(dispatcher, escape_html=settings.escape_html)


def main() -> None:
    configure_logging()
    load_dotenv()

    settings = load_settings()
    service = build_service(settings)
    scheduler = build_scheduler(service, settings)

    if settings.check_on_startup:
        run_check_blocking(service)

    scheduler.start()
    LOGGER.info(
        "Daily checks scheduled at %02d:%02d, serving on %s:%s",
        settings.check_hour,
        settings.check_minute,
        settings.host,
        settings.port,
    )

    app = create_app(
        trigger_check=lambda: start_background_check(service),
        count_records=service.count_records,
    )
    try:
        app.run(host=settings.host, port=settings.port)
    finally:
        scheduler.shutdown(wait=False)


if __name__ == "__main__":
    main()
