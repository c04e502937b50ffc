"""Shareable view URL with browser-style history."""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


class ShareableUrl:
    """Current page URL plus the entries pushed onto its history.

    ``push_state`` appends a new entry without any reload semantics; the
    original query parameters and fragment are kept.
    """

    def __init__(self, url: str = "") -> None:
        self.history: List[str] = [url]

    @property
    def current(self) -> str:
        return self.history[-1]

    def get_param(self, name: str) -> Optional[str]:
        """Return the first value of query parameter ``name``, if any."""
        query = urlsplit(self.current).query
        for key, value in parse_qsl(query, keep_blank_values=True):
            if key == name:
                return value
        return None

    def with_param(self, name: str, value: str) -> str:
        """Return the current URL with ``name`` set to ``value``.

        The first occurrence keeps its position and later duplicates are
        dropped. A missing parameter is appended.
        """
        parts = urlsplit(self.current)
        query = []
        replaced = False
        for key, val in parse_qsl(parts.query, keep_blank_values=True):
            if key != name:
                query.append((key, val))
            elif not replaced:
                query.append((name, value))
                replaced = True
        if not replaced:
            query.append((name, value))
        return urlunsplit(parts._replace(query=urlencode(query)))

    def push_state(self, name: str, value: str) -> str:
        """Set ``name`` to ``value`` and record the result as a new entry."""
        url = self.with_param(name, value)
        self.history.append(url)
        return url
