"""
proxy — handler brzegowy GateKeep: origin → uwierzytelnienie → gate().

Publiczne API:
  handle_request(path_and_query, headers, config, fetch, authenticate)
  fetch_origin(path_and_query, config, session)   → OriginResponse
  is_authenticated(headers)                       → bool (zawsze False)
  session_authenticator(verify, session_cookie)   → Authenticator
  is_bypass_path(path, config)                    → bool
  OriginResponse                                  odpowiedź originu
"""

from .auth import is_authenticated, session_authenticator
from .handler import FAILURE_BODY, failure_response, handle_request, is_bypass_path
from .origin import OriginResponse, fetch_origin, origin_url

__all__ = [
    "is_authenticated",
    "session_authenticator",
    "FAILURE_BODY",
    "failure_response",
    "handle_request",
    "is_bypass_path",
    "OriginResponse",
    "fetch_origin",
    "origin_url",
]
