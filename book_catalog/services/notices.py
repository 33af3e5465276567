"""
Session Notices

One-shot confirmation messages ("Book added successfully!") shown on the
page after a create, update or delete, then discarded.

Notices live in the per-request session mapping provided by Starlette's
SessionMiddleware (a signed cookie). A NoticeStore is built for each
request around that mapping; it is never shared between requests.

Usage:
    notices = NoticeStore(request.session)
    notices.set_once("create", "Book added successfully!")

    # next request
    notices.consume_all()   # {"create": "Book added successfully!"}
    notices.consume_all()   # {}
"""

from collections.abc import MutableMapping
from typing import Any

NOTICE_KEYS = ("create", "update", "delete")

_PREFIX = "notice:"


class NoticeStore:
    """get / set_once / consume access to notices in a session mapping."""

    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session

    def get(self, key: str) -> str | None:
        """Read a notice without clearing it."""
        return self._session.get(_PREFIX + key)

    def set_once(self, key: str, message: str) -> None:
        """Store a notice to be shown on the next page that consumes it."""
        self._session[_PREFIX + key] = message

    def consume(self, key: str) -> str | None:
        """Return a notice and remove it, so it is only ever shown once."""
        return self._session.pop(_PREFIX + key, None)

    def consume_all(self) -> dict[str, str]:
        """Consume every pending create/update/delete notice."""
        messages = {}
        for key in NOTICE_KEYS:
            message = self.consume(key)
            if message:
                messages[key] = message
        return messages
