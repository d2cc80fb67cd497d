"""Error types shared across the service.

Every error carries a machine-readable ``code`` next to its message so
handlers can map it to an HTTP status without string matching.
"""

from typing import Any


class PortfolioStatsError(Exception):
    """Base exception for the portfolio stats service."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UpstreamError(PortfolioStatsError):
    """An upstream API was unreachable or answered with something unusable."""

    def __init__(self, service: str, message: str, status_code: int | None = None) -> None:
        details: dict[str, Any] = {"service": service}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__("UPSTREAM_ERROR", f"{service}: {message}", details)
        self.service = service
        self.status_code = status_code


class NotConfiguredError(PortfolioStatsError):
    """Credentials or account names needed for an upstream are missing."""

    def __init__(self, service: str, missing: list[str]) -> None:
        super().__init__(
            "NOT_CONFIGURED",
            f"{service} is not configured (missing: {', '.join(missing)})",
            {"service": service, "missing": missing},
        )
        self.service = service
        self.missing = missing


class TokenUnavailableError(PortfolioStatsError):
    """No refresh token is stored and no fallback token is configured."""

    def __init__(self, message: str = "Refresh token not found") -> None:
        super().__init__("TOKEN_UNAVAILABLE", message)


class UnknownTargetError(PortfolioStatsError):
    """An invalidation target outside the known enumeration was requested."""

    def __init__(self, target: str | None, available: list[str]) -> None:
        super().__init__(
            "UNKNOWN_TARGET",
            f"Invalid target. Use: {', '.join(available[:-1])}, or {available[-1]}",
            {"target": target, "available": available},
        )
        self.target = target
        self.available = available
