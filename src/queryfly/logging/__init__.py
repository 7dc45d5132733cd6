# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Structured logging for QueryFly.

:func:`configure_logging` reads ``queryfly.logging`` and routes structlog
through the stdlib root logger. Data sources and services log under
``queryfly.*`` names, so ``queryfly.logging.level`` can quiet or raise a
single engine. Every event emitted by a data source or service gets an
``outcome`` key, which makes failed queries easy to pick out of JSON logs.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.typing import EventDict, Processor

from queryfly.config.properties.logging import LoggingProperties
from queryfly.core.config import Config

QUERY_EVENT_OUTCOMES: dict[str, str] = {
    "query_executed": "ok",
    "filters_split": "planned",
    "query_failed": "failed",
    "count_failed": "failed",
    "get_by_id_failed": "failed",
    "operation_not_supported": "unsupported",
}


def tag_query_outcome(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ``outcome`` to the query events listed in :data:`QUERY_EVENT_OUTCOMES`."""
    outcome = QUERY_EVENT_OUTCOMES.get(event_dict.get("event", ""))
    if outcome is not None:
        event_dict.setdefault("outcome", outcome)
    return event_dict


def build_processors(properties: LoggingProperties) -> list[Processor]:
    renderer: Processor
    if properties.format.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        tag_query_outcome,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def _level(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)


def configure_logging(config: Config | None = None, *, stream: TextIO | None = None) -> LoggingProperties:
    """Configure structlog and the stdlib root logger from ``queryfly.logging``.

    ``level.root`` sets the root level; any other key under ``level`` is a
    logger name, e.g. ``queryfly.data.adapters.memory: DEBUG``. Output goes
    to *stream*, or stderr.

    Returns the bound properties.
    """
    properties = (config or Config({})).bind(LoggingProperties)
    levels = dict(properties.level)
    root = levels.pop("root", "INFO")

    # Loggers are module globals, so they must pick up a later reconfiguration.
    structlog.configure(
        processors=build_processors(properties),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(format="%(message)s", stream=stream or sys.stderr, level=_level(root), force=True)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(_level(level))
    return properties


__all__ = [
    "QUERY_EVENT_OUTCOMES",
    "build_processors",
    "configure_logging",
    "tag_query_outcome",
]
