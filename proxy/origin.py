"""
proxy/origin.py — pobieranie treści z originu (requests).

Publiczne API:
  OriginResponse                                  status, nagłówki, treść
  fetch_origin(path_and_query, config, session)   → OriginResponse
  origin_url(path_and_query, config)              → str
  request_path(path_and_query)                    → str
"""

from __future__ import annotations

from dataclasses import dataclass, field

import requests

from gating.config import GatingConfig
from gating.errors import OriginError

_USER_AGENT = "GateKeep/0.1 (+content-gating proxy)"


@dataclass(slots=True)
class OriginResponse:
    """Odpowiedź przekazywana dalej do widza. Nagłówki z kluczami lowercase."""
    status:  int
    headers: dict[str, str] = field(default_factory=dict)
    body:    str = ""

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


def request_path(path_and_query: str) -> str:
    """
    Ścieżka żądania zawsze z dokładnie jednym "/" na początku.

    "//host/x" nie może stać się referencją sieciową do innego hosta.
    """
    return "/" + path_and_query.lstrip("/")


def origin_url(path_and_query: str, config: GatingConfig) -> str:
    """Skleja ścieżkę żądania z bazowym URL originu (host zawsze z konfiguracji)."""
    return config.origin_base_url.rstrip("/") + request_path(path_and_query)


def _body_encoding(resp: requests.Response) -> str:
    # Bez charset w Content-Type requests przyjmuje ISO-8859-1 dla text/*,
    # a strony z originu są w praktyce w UTF-8.
    if "charset=" in resp.headers.get("Content-Type", "").lower():
        return resp.encoding or "utf-8"
    try:
        resp.content.decode("utf-8")
    except UnicodeDecodeError:
        return resp.apparent_encoding or "utf-8"
    return "utf-8"


def fetch_origin(
    path_and_query: str,
    config: GatingConfig,
    session: requests.Session | None = None,
    headers: dict[str, str] | None = None,
) -> OriginResponse:
    """
    Pobiera zasób z originu.

    Raises:
        OriginError: błąd sieci / timeout (requests.RequestException).
    """
    url = origin_url(path_and_query, config)
    request_headers = {"User-Agent": _USER_AGENT, **(headers or {})}
    http = session or requests.Session()
    try:
        resp = http.get(url, timeout=config.fetch_timeout, headers=request_headers, allow_redirects=True)
    except requests.RequestException as exc:
        raise OriginError(url, str(exc)) from exc
    finally:
        if session is None:
            http.close()

    resp.encoding = _body_encoding(resp)
    return OriginResponse(
        status=resp.status_code,
        headers={k.lower(): v for k, v in resp.headers.items()},
        body=resp.text,
    )
