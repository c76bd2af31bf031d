"""Runtime configuration for ledgermath."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class MathConfig:
    """Diagnostic switches for numeric operations.

    Configuration never changes a numeric result; it only controls what is
    reported about it.

    Attributes:
        log_soft_failures: If True, try_* operations emit a debug event when
            they return the (False, 0) fallback.
    """

    log_soft_failures: bool = True

    @classmethod
    def from_env(cls) -> MathConfig:
        """Build a config from LEDGERMATH_* environment variables."""
        raw = os.environ.get("LEDGERMATH_LOG_SOFT_FAILURES", "true")
        return cls(log_soft_failures=raw.lower() in _TRUTHY)


# Default configuration instance
DEFAULT_MATH_CONFIG = MathConfig()
