"""
proxy/auth.py — ustalenie, czy widz jest zalogowany.

Prawdziwa logika uwierzytelnienia jest poza zakresem GateKeep: silnik
konsumuje wyłącznie wynik logiczny. Domyślna implementacja traktuje każdego
widza jako niezalogowanego. Nagłówek i ciasteczko sesji pochodzą od widza,
więc same w sobie niczego nie dowodzą: session_authenticator() przyjmuje
token dopiero po weryfikacji przez wstrzyknięty weryfikator.
"""

from __future__ import annotations

from http.cookies import CookieError, SimpleCookie
from typing import Callable, Mapping

type Authenticator = Callable[[Mapping[str, str]], bool]
type TokenVerifier = Callable[[str], bool]

SESSION_HEADER = "x-gatekeep-session"


def _cookie_value(raw: str, name: str) -> str:
    jar = SimpleCookie()
    try:
        jar.load(raw)
    except CookieError:
        return ""
    morsel = jar.get(name)
    return morsel.value if morsel is not None else ""


def is_authenticated(headers: Mapping[str, str]) -> bool:
    """Domyślnie każdy widz jest niezalogowany."""
    return False


def session_token(headers: Mapping[str, str], session_cookie: str | None = None) -> str:
    """Token sesji z nagłówka X-GateKeep-Session albo z ciasteczka session_cookie ("" gdy brak)."""
    lowered = {k.lower(): v for k, v in headers.items()}
    token = lowered.get(SESSION_HEADER, "").strip()
    if not token and session_cookie:
        token = _cookie_value(lowered.get("cookie", ""), session_cookie).strip()
    return token


def session_authenticator(verify: TokenVerifier, session_cookie: str | None = None) -> Authenticator:
    """
    Authenticator oparty o token sesji.

    Widz jest zalogowany tylko wtedy, gdy token istnieje i verify(token)
    zwraca True. Brak tokenu → niezalogowany, bez wołania weryfikatora.
    """
    def authenticate(headers: Mapping[str, str]) -> bool:
        token = session_token(headers, session_cookie)
        return bool(token) and verify(token)

    return authenticate
