from __future__ import annotations

import logging
from typing import Callable

from flask import Flask

LOGGER = logging.getLogger(__name__)

CHECK_NOW_PATH = "/check-now"
CHECK_TRIGGERED_TEXT = "Manual check triggered"


def create_app(trigger_check: Callable[[], None], count_records: Callable[[], int]) -> Flask:
    """Build the trigger surface.

    ``trigger_check`` must return immediately; the pass itself runs in the
    background and its outcome never reaches the HTTP caller.
    """
    app = Flask(__name__)

    @app.route(CHECK_NOW_PATH)
    def check_now() -> tuple[str, int]:
        LOGGER.info("Manual check requested")
        trigger_check()
        return CHECK_TRIGGERED_TEXT, 200

    @app.route("/", defaults={"path": ""})
    @app.route("/<path:path>")
    def status(path: str) -> tuple[str, int]:
        return f"Birthday Bot Active. Loaded {count_records()} friends.", 200

    return app
