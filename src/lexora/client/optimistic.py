"""Optimistic updates and stale-response guarding."""

from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class RequestSequencer:
    """Hands out monotonically increasing tickets per key.

    A response is applied only if its ticket is still the newest one
    issued for that key, so late replies cannot overwrite newer state.
    Tickets come from one counter, so they also order requests across keys.
    """

    def __init__(self) -> None:
        self._counter = 0
        self._latest: dict[str, int] = {}

    def next_ticket(self) -> int:
        """A ticket that orders after everything issued so far."""
        self._counter += 1
        return self._counter

    def begin(self, key: str) -> int:
        ticket = self.next_ticket()
        self._latest[key] = ticket
        return ticket

    def is_latest(self, key: str, ticket: int) -> bool:
        return self._latest.get(key) == ticket


class OptimisticValues(Generic[K, V]):
    """Server-confirmed values per key, plus values still awaiting the server.

    An in-flight value is visible while it is newer than the newest
    accepted one; otherwise the newest confirmed value is. A rejected
    value simply leaves the in-flight set, so it can never stay visible.

    Confirmations are ordered by the ticket at which the server's answer
    was observed, in-flight values by the ticket they were issued with.
    """

    def __init__(self) -> None:
        self._confirmed: dict[K, tuple[int, V]] = {}
        self._accepted: dict[K, int] = {}
        self._pending: dict[K, dict[int, V]] = {}

    def confirm(self, key: K, value: V, observed_at: int) -> None:
        """Record a server-side value; older observations never win."""
        current = self._confirmed.get(key)
        if current is None or observed_at >= current[0]:
            self._confirmed[key] = (observed_at, value)

    def start(self, key: K, value: V, ticket: int) -> None:
        self._pending.setdefault(key, {})[ticket] = value

    def finish(self, key: K, ticket: int, accepted: bool, observed_at: int) -> None:
        pending = self._pending.get(key, {})
        if ticket not in pending:
            # Cleared while the request was in flight
            return
        value = pending.pop(ticket)
        if not pending:
            self._pending.pop(key, None)
        if accepted:
            self.confirm(key, value, observed_at)
            self._accepted[key] = max(ticket, self._accepted.get(key, 0))

    def visible(self, key: K, default: V) -> V:
        pending = self._pending.get(key)
        if pending:
            newest = max(pending)
            if newest > self._accepted.get(key, 0):
                return pending[newest]
        if key in self._confirmed:
            return self._confirmed[key][1]
        return default

    def is_pending(self, key: K) -> bool:
        return key in self._pending

    def clear(self) -> None:
        self._confirmed.clear()
        self._accepted.clear()
        self._pending.clear()


async def optimistic_update(
    apply: Callable[[], None],
    commit: Callable[[], Awaitable[object]],
    settle: Callable[[bool], None],
) -> None:
    """Apply locally, commit, then settle with the outcome.

    ``settle(False)`` runs before the commit error is re-raised and is
    responsible for withdrawing what ``apply`` showed.
    """
    apply()
    try:
        await commit()
    except Exception:
        settle(False)
        raise
    settle(True)
