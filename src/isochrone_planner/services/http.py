"""
Shared HTTP client.

Provides a pre-configured ``requests.Session`` with a default timeout and a
User-Agent. Overpass asks clients to identify themselves, so the agent string
carries the contact from ``ISOCHRONE_PLANNER_CONTACT`` when one is set.

Both Overpass and OpenRouteService are called with POST and nothing is
retried: a failed request surfaces immediately and the caller decides whether
to skip it.

Usage::

    from isochrone_planner.services.http import session

    resp = session.post("https://overpass-api.de/api/interpreter", data={"data": query})
    resp.raise_for_status()
"""

from __future__ import annotations

import requests

from isochrone_planner import __version__
from isochrone_planner.config import get_settings

DEFAULT_TIMEOUT = 60  # seconds; Overpass queries can be slow


def build_user_agent(contact: str = "") -> str:
    """``isochrone-planner/<version>``, with ``(contact)`` appended when given."""
    agent = f"isochrone-planner/{__version__}"
    contact = contact.strip()
    return f"{agent} ({contact})" if contact else agent


def create_session(
    user_agent: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` that identifies itself and never hangs forever.

    Args:
        user_agent: Value for the User-Agent header (defaults to
            ``build_user_agent()`` with no contact).
        timeout: Default timeout applied to every request that doesn't pass
            its own ``timeout=``.
    """
    s = requests.Session()
    s.headers["User-Agent"] = user_agent or build_user_agent()

    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session(build_user_agent(get_settings().contact))
