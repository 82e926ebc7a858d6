from __future__ import annotations

import json
import logging
import os

from birthday_mailer.models import PersonRecord
from birthday_mailer.settings import FRIENDS_CONFIG_ENV

LOGGER = logging.getLogger(__name__)

_QUOTE_CHARS = ("'", '"')


def strip_wrapping_quotes(raw: str) -> str:
    """Drop one layer of shell quoting around the JSON payload.

    Single quotes are removed first, then double quotes, so a value like
    ``'"[...]"'`` loses both layers.
    """
    value = raw
    for quote in _QUOTE_CHARS:
        if len(value) >= 2 and value.startswith(quote) and value.endswith(quote):
            value = value[1:-1]
    return value


def parse_records(raw: str | None) -> list[PersonRecord]:
    if raw is None or not raw.strip():
        LOGGER.critical("%s environment variable is missing.", FRIENDS_CONFIG_ENV)
        return []

    payload = strip_wrapping_quotes(raw.strip())
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        LOGGER.critical("Could not parse %s JSON: %s", FRIENDS_CONFIG_ENV, exc)
        return []

    if not isinstance(data, list):
        LOGGER.critical(
            "%s must be a JSON array, got %s", FRIENDS_CONFIG_ENV, type(data).__name__
        )
        return []

    records: list[PersonRecord] = []
    for position, row in enumerate(data):
        if not isinstance(row, dict):
            LOGGER.error("Skipping %s entry #%s: not a JSON object", FRIENDS_CONFIG_ENV, position)
            continue
        records.append(PersonRecord.from_mapping(row))
    return records


def load_records(env_var: str = FRIENDS_CONFIG_ENV) -> list[PersonRecord]:
    return parse_records(os.getenv(env_var))
