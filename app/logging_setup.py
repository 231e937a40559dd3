# app/logging_setup.py
import logging
from logging.handlers import TimedRotatingFileHandler

from .config import Settings


LOG_FORMAT = "[%(asctime)s.%(msecs)03d] [%(levelname).3s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that would otherwise flood INFO output.
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

_HANDLER_MARKER = "_book_catalog_handler"


def configure_logging(settings: Settings) -> None:
    """Install console and daily-rotating file handlers on the root logger.

    Calling it again replaces the handlers installed by a previous call, so
    app factories can be invoked repeatedly (tests, reloads) without stacking
    duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level)

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if settings.log_dir:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            TimedRotatingFileHandler(
                settings.log_dir / "app.txt",
                when="midnight",
                backupCount=settings.log_retention_days,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
