"""Origin allow-list checks and CORS response headers."""

from __future__ import annotations

from collections.abc import Iterable

ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOW_METHODS = "POST, OPTIONS"


class OriginPolicy:
    """Decide whether a browser origin may call the endpoint."""

    def __init__(
        self,
        allowed_origins: Iterable[str],
        default_origin: str | None = None,
        *,
        allow_missing_origin: bool = True,
        allow_referer_prefix: bool = True,
    ) -> None:
        self._allowed = tuple(allowed_origins)
        if not self._allowed and default_origin is None:
            raise ValueError("At least one allowed origin is required")
        self._default = default_origin if default_origin is not None else self._allowed[0]
        self._allow_missing_origin = allow_missing_origin
        self._allow_referer_prefix = allow_referer_prefix

    @property
    def default_origin(self) -> str:
        return self._default

    def is_allowed(self, origin: str | None, referer: str | None) -> bool:
        """Return True when the request may proceed past the origin guard.

        An exact ``Origin`` match always passes. A ``Referer`` that starts
        with an allowed origin passes, and so does a request without any
        ``Origin`` header (non-browser callers); both of these can be
        switched off.
        """

        if origin and origin in self._allowed:
            return True
        if self._allow_referer_prefix and referer:
            if any(referer.startswith(allowed) for allowed in self._allowed):
                return True
        if not origin and self._allow_missing_origin:
            return True
        return False

    def allow_origin_for(self, origin: str | None) -> str:
        """Origin to echo back: the matched one, otherwise the default."""

        if origin and origin in self._allowed:
            return origin
        return self._default

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.allow_origin_for(origin),
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Vary": "Origin",
        }
