# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Splunk compatible log output.

Every record is rendered as a single line JSON object. Structured entries
(`SplunkExtendedLogEntry`) additionally contribute their fields as top level keys.
"""

import json
import logging
from datetime import datetime

from pydantic import BaseModel


class SplunkExtendedLogEntry(BaseModel):
    """Container for a log message with additional, machine readable fields."""

    message: str

    def extended_fields(self) -> dict[str, object]:
        """All fields besides the message which are set."""
        return self.model_dump(mode="json", exclude_none=True, exclude={"message"})

    def __str__(self) -> str:
        fields = " ".join(f"{key}={value}" for key, value in self.extended_fields().items())
        return f"{self.message} {fields}" if fields else self.message


class SplunkFormatter(logging.Formatter):
    """Formats records as json with the keys expected by the splunk index."""

    def __init__(self, defaults: dict[str, str] | None = None) -> None:
        """
        Args:
            defaults (dict, optional): values for `app_name` and `correlation_id`
                used when the record does not provide them.
        """
        super().__init__()
        self._defaults = defaults or {}

    def _lookup(self, record: logging.LogRecord, key: str) -> str | None:
        return getattr(record, key, None) or self._defaults.get(key)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        # e.g. 2024-02-07T14:38:19.565+01:00
        return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "@timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "app": self._lookup(record, "app_name"),
            "hash": self._lookup(record, "correlation_id"),
        }
        if isinstance(record.msg, SplunkExtendedLogEntry):
            data.update(record.msg.extended_fields())
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)
