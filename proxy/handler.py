"""
proxy/handler.py — obsługa żądania widza na brzegu.

handle_request(path_and_query, headers, config, fetch, authenticate) → OriginResponse

  1. ścieżki bypass (fragmenty, nawigacja) → odpowiedź originu bez zmian
     + Access-Control-Allow-Origin: *
  2. typ treści inny niż HTML              → odpowiedź originu bez zmian
  3. HTML                                  → gate(); status i nagłówki z originu

Każdy wyjątek (origin, silnik) kończy się ogólną odpowiedzią 500 — surowy
wyjątek nigdy nie trafia do widza.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping
from urllib.parse import urlsplit

from gating.config import GatingConfig
from gating.engine import gate, is_html_content_type

from .auth import Authenticator, is_authenticated
from .origin import OriginResponse, fetch_origin, request_path

logger = logging.getLogger(__name__)

type Fetcher = Callable[[str, GatingConfig], OriginResponse]

FAILURE_BODY = "Content protection service temporarily unavailable"

# Nagłówki, które przestają być prawdziwe po przepisaniu treści.
_STALE_HEADERS = ("content-length", "content-encoding", "etag")


def is_bypass_path(path: str, config: GatingConfig) -> bool:
    return any(path.startswith(prefix) for prefix in config.bypass_path_prefixes)


def failure_response() -> OriginResponse:
    return OriginResponse(500, {"content-type": "text/plain"}, FAILURE_BODY)


def handle_request(
    path_and_query: str,
    headers: Mapping[str, str],
    config: GatingConfig,
    fetch: Fetcher = fetch_origin,
    authenticate: Authenticator = is_authenticated,
) -> OriginResponse:
    """
    Obsługuje jedno żądanie: pobiera origin i bramkuje treść HTML.

    Args:
        path_and_query: ścieżka żądania z query stringiem, np. "/news?x=1"
        headers:        nagłówki żądania widza
        config:         konfiguracja GateKeep
        fetch:          kolaborator originu (domyślnie requests)
        authenticate:   kolaborator uwierzytelnienia (nagłówki → bool)
    """
    path = urlsplit(request_path(path_and_query)).path or "/"
    try:
        origin = fetch(path_and_query, config)

        if is_bypass_path(path, config):
            logger.debug("Bypass %s", path)
            origin.headers["access-control-allow-origin"] = "*"
            return origin

        if not is_html_content_type(origin.content_type, config):
            return origin

        authenticated = authenticate(headers)
        body = gate(origin.body, origin.content_type, authenticated, config)
        if body == origin.body:
            logger.info("%s: bez zmian (zalogowany=%s)", path, authenticated)
            return origin

        out_headers = {k: v for k, v in origin.headers.items() if k not in _STALE_HEADERS}
        logger.info("%s: treść bramkowana (zalogowany=%s)", path, authenticated)
        return OriginResponse(origin.status, out_headers, body)

    except Exception:
        logger.exception("Obsługa %s nie powiodła się", path)
        return failure_response()
