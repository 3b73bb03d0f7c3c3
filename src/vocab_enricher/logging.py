import logging
import sys


# Third-party loggers that are chatty at INFO (one line per HTTP request)
NOISY_LOGGERS = ("openai", "httpx", "httpcore", "aiohttp")


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the given name."""
    return logging.getLogger(name)


def setup_logging(level: int | str = "INFO") -> None:
    """Send log records to stdout at the given level.

    Calling it again replaces the previous handler. HTTP client libraries
    are held at WARNING regardless of `level`.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
