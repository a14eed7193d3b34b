"""HTTP surface serving the current-conditions report."""

from __future__ import annotations

import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Final
from urllib.parse import parse_qs, urlparse

from pwsreport.controller import ReportService
from pwsreport.display.render import TEXT_CONTENT_TYPE, ReportFormat
from pwsreport.errors import (
    ConfigError,
    FetchTimeoutError,
    PwsReportError,
    WeatherAPIError,
)

logger: Final = logging.getLogger(__name__)


def status_for_error(error: Exception) -> HTTPStatus:
    """Map a per-request failure to an HTTP status.

    Args:
        error: Exception raised while building the report

    Returns:
        504 for provider timeouts, 502 for other provider failures,
        500 for everything else
    """
    if isinstance(error, FetchTimeoutError):
        return HTTPStatus.GATEWAY_TIMEOUT
    if isinstance(error, WeatherAPIError):
        return HTTPStatus.BAD_GATEWAY
    return HTTPStatus.INTERNAL_SERVER_ERROR


def negotiate_format(accept: str | None, query: str) -> ReportFormat:
    """Choose text or HTML from the query string and Accept header."""
    requested = parse_qs(query).get("format", [""])[0].lower()
    if requested in ("html", "text"):
        return "html" if requested == "html" else "text"
    return "html" if accept and "text/html" in accept else "text"


class ReportRequestHandler(BaseHTTPRequestHandler):
    """Request handler for ``GET /``.

    The handler never lets a request error escape: failures are logged and
    answered with a 5xx response whose body names the error.
    """

    server: ReportServer
    server_version = "pws-report"

    def do_GET(self) -> None:  # noqa: N802
        url = urlparse(self.path)
        if url.path != "/":
            self._send(HTTPStatus.NOT_FOUND, f"Not found: {url.path}\n")
            return

        fmt = negotiate_format(self.headers.get("Accept"), url.query)
        service = self.server.service
        try:
            body = service.render_report(fmt)
        except WeatherAPIError as err:
            logger.error("Weather report failed (%s): %s", err.code, err.message)
            self._send(status_for_error(err), f"Weather report unavailable: {err}\n")
            return
        except ConfigError as err:
            logger.error("Weather report failed: %s", err)
            self._send(status_for_error(err), f"Configuration error: {err}\n")
            return
        except PwsReportError as err:
            logger.error("Weather report failed: %s", err)
            self._send(status_for_error(err), f"Weather report failed: {err}\n")
            return
        except Exception as exc:
            logger.exception("Unexpected error while building report")
            self._send(status_for_error(exc), f"Internal error: {type(exc).__name__}\n")
            return

        self._send(HTTPStatus.OK, body, service.renderer.content_type(fmt))

    def _send(
        self, status: HTTPStatus, body: str, content_type: str = TEXT_CONTENT_TYPE
    ) -> None:
        payload = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args: Any) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


class ReportServer(ThreadingHTTPServer):
    """Threaded HTTP server bound to a ready ReportService."""

    daemon_threads = True

    def __init__(
        self,
        service: ReportService,
        host: str = "0.0.0.0",
        port: int = 8080,
        handler: type[BaseHTTPRequestHandler] = ReportRequestHandler,
    ) -> None:
        """Initialize and bind the server.

        Args:
            service: Service built by the startup sequence
            host: Interface to listen on
            port: TCP port (0 picks a free port)
            handler: Request handler class
        """
        super().__init__((host, port), handler)
        self.service = service

    @property
    def url(self) -> str:
        """Base URL the server is reachable at."""
        host, port = self.server_address[:2]
        if host in ("0.0.0.0", ""):
            host = "localhost"
        return f"http://{host}:{port}/"
