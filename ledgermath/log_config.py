"""structlog setup for applications embedding ledgermath.

The library itself only calls structlog.get_logger(); it never configures
logging on import.
"""

import logging

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Install a console processor chain with level filtering.

    Args:
        verbose: Emit debug events (including try_* soft failures) if True
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
