"""Service entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Build the Starlette app
- Serve it with uvicorn
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn

from htmlpreview import __version__
from htmlpreview.config import Settings
from htmlpreview.transport import create_app

log = structlog.get_logger()


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _setup_logging(settings: Settings) -> None:
    """Route structlog events to stderr at the configured level.

    Uvicorn's own logging config is disabled in ``main`` so request and
    preview events share one stream and one format.
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _renderer(settings.logging.format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.logging.level]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def main() -> None:
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        host=settings.server.host,
        port=settings.server.port,
    )

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # structlog handles logging
    )


if __name__ == "__main__":
    main()
