from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import now_local


@dataclass(frozen=True)
class CreatedCredential:
    email: str
    name: str
    password: str


class PendingCredentials:
    """Passwords of freshly created coordinators, kept per admin session.

    Lives in process memory only. Entries are dropped when the admin signs
    out or when the session they belong to expires, so a password can be
    shown for manual handoff and is then gone.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_local):
        self._lock = threading.Lock()
        self._clock = clock
        self._by_token: dict[str, tuple[datetime, list[CreatedCredential]]] = {}

    def _prune(self) -> None:
        now = self._clock()
        for token in [t for t, (expires_at, _) in self._by_token.items() if expires_at <= now]:
            del self._by_token[token]

    def remember(self, token: str, credential: CreatedCredential, *, expires_at: datetime) -> None:
        with self._lock:
            self._prune()
            _, items = self._by_token.get(token, (expires_at, []))
            items.append(credential)
            self._by_token[token] = (expires_at, items)

    def list_for(self, token: str) -> list[CreatedCredential]:
        with self._lock:
            self._prune()
            _, items = self._by_token.get(token, (None, []))
            return list(items)

    def discard(self, token: str) -> None:
        with self._lock:
            self._by_token.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            self._prune()
            return len(self._by_token)
