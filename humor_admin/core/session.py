"""
Cookie-backed session storage for Supabase Auth.

Supabase Auth persists its session (and the PKCE code verifier) through a
storage object exposing get_item / set_item / remove_item. This adapter keeps
those items in HTTP cookies: reads come from the incoming request, writes are
recorded and applied to the outgoing response by the auth gate.
"""

import base64
import logging
from typing import Dict, List, Mapping, Optional

from starlette.responses import Response

logger = logging.getLogger(__name__)

BASE64_PREFIX = "base64-"
MAX_CHUNK_SIZE = 3180


def _encode(value: str) -> str:
    encoded = base64.urlsafe_b64encode(value.encode("utf-8")).decode("ascii")
    return BASE64_PREFIX + encoded.rstrip("=")


def _decode(raw: str) -> Optional[str]:
    if not raw.startswith(BASE64_PREFIX):
        return raw
    payload = raw[len(BASE64_PREFIX):]
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.urlsafe_b64decode(payload.encode("ascii")).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        logger.debug("Discarding undecodable session cookie")
        return None


class CookieSessionStorage:
    def __init__(
        self,
        cookies: Mapping[str, str],
        prefix: str = "sb",
        secure: bool = False,
        max_age: Optional[int] = None,
    ):
        self._cookies: Dict[str, str] = dict(cookies)
        self._pending: Dict[str, Optional[str]] = {}
        self.prefix = prefix
        self.secure = secure
        self.max_age = max_age

    def cookie_name(self, key: str) -> str:
        return f"{self.prefix}-{key.replace('.', '-')}"

    def _chunk_names(self, name: str) -> List[str]:
        names = []
        index = 0
        while f"{name}.{index}" in self._cookies:
            names.append(f"{name}.{index}")
            index += 1
        return names

    def _set_cookie(self, name: str, value: str) -> None:
        self._cookies[name] = value
        self._pending[name] = value

    def _delete_cookie(self, name: str) -> None:
        self._cookies.pop(name, None)
        self._pending[name] = None

    def get_item(self, key: str) -> Optional[str]:
        name = self.cookie_name(key)
        if name in self._cookies:
            return _decode(self._cookies[name])
        chunks = self._chunk_names(name)
        if not chunks:
            return None
        return _decode("".join(self._cookies[c] for c in chunks))

    def set_item(self, key: str, value: str) -> None:
        name = self.cookie_name(key)
        encoded = _encode(value)
        stale = set(self._chunk_names(name))
        if name in self._cookies:
            stale.add(name)

        if len(encoded) <= MAX_CHUNK_SIZE:
            self._set_cookie(name, encoded)
            stale.discard(name)
        else:
            for index, start in enumerate(range(0, len(encoded), MAX_CHUNK_SIZE)):
                chunk_name = f"{name}.{index}"
                self._set_cookie(chunk_name, encoded[start:start + MAX_CHUNK_SIZE])
                stale.discard(chunk_name)

        for old in stale:
            self._delete_cookie(old)

    def remove_item(self, key: str) -> None:
        name = self.cookie_name(key)
        if name in self._cookies:
            self._delete_cookie(name)
        for chunk in self._chunk_names(name):
            self._delete_cookie(chunk)

    def clear(self) -> None:
        """Drop every session cookie under this prefix."""
        for name in [n for n in self._cookies if n.startswith(f"{self.prefix}-")]:
            self._delete_cookie(name)

    @property
    def has_pending_writes(self) -> bool:
        return bool(self._pending)

    def apply(self, response: Response) -> Response:
        """Write every recorded cookie mutation onto the response."""
        for name, value in self._pending.items():
            if value is None:
                response.delete_cookie(name, path="/")
            else:
                response.set_cookie(
                    name,
                    value,
                    max_age=self.max_age,
                    path="/",
                    secure=self.secure,
                    httponly=True,
                    samesite="lax",
                )
        return response
