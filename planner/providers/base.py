from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response

from ..errors import ProviderError, ProviderTimeout, QuotaExceeded


@dataclass
class RequestConfig:
    timeout: float = 10.0


class OpenMeteoProvider:
    """Base class that adds timeouts and error classification for Open-Meteo.

    Every call is attempted once.  Transport failures are reclassified into
    :class:`ProviderTimeout`, :class:`QuotaExceeded` or :class:`ProviderError`.
    """

    service = "OpenMeteo API"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response, action: str) -> Response:
        if response.status_code == 429:
            self._log.warning("Quota exceeded while %s: %s", action, response.text)
            raise QuotaExceeded(
                "Rate limit exceeded. Please try again later.",
                status_code=response.status_code,
                service=self.service,
            )
        if response.status_code >= 400:
            self._log.error("Provider returned %s while %s: %s", response.status_code, action, response.text)
            reason = response.reason or f"HTTP {response.status_code}"
            raise ProviderError(
                f"Request failed while {action}: {reason}",
                status_code=response.status_code,
                service=self.service,
            )
        return response

    def _request(self, method: str, url: str, *, action: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out while %s", action, exc_info=exc)
            raise ProviderTimeout(f"Request timeout while {action}", service=self.service) from exc
        except requests.RequestException as exc:
            self._log.error("Request failed while %s", action, exc_info=exc)
            raise ProviderError(f"Request failed while {action}: {exc}", service=self.service) from exc
        return self._handle_response(response, action)

    def _json(self, response: Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON while %s", action, exc_info=exc)
            raise ProviderError(f"Invalid JSON received while {action}", service=self.service) from exc


__all__ = ["OpenMeteoProvider", "RequestConfig"]
