"""Root logger setup for the command line."""

from __future__ import annotations

import logging

# httpx logs every request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Log to stderr at INFO, or DEBUG with ``verbose``.

    HTTP client libraries stay at WARNING unless ``verbose`` is set. Pass
    ``force=True`` to replace handlers installed earlier (tests, notebooks).
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
