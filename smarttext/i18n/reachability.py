"""
Network reachability.

Tracks whether outbound provider calls are worth attempting. The state is a
single boolean that follows the latest connectivity signal; it keeps no
history.
"""

from __future__ import annotations

import logging

import httpx

from smarttext.core.events import CONNECTIVITY_CHANGED, Event, EventBus, Subscription
from smarttext.core.observable import ObservableValue, Observer

logger = logging.getLogger(__name__)


class ReachabilityMonitor:
    """
    Online/offline state fed by connectivity transitions.

    Signals arrive either as direct calls (``connection_changed``) or as
    ``connectivity.changed`` events on a bus passed to ``listen``.
    """

    def __init__(self, online: bool = True):
        self._state = ObservableValue(online)
        self._subscription: Subscription | None = None
        self._bus: EventBus | None = None

    @property
    def online(self) -> bool:
        return self._state.value

    def connection_changed(self, online: bool) -> None:
        """Record a connectivity transition."""
        if self._state.set(bool(online)):
            logger.info("Network reachable" if online else "Network unreachable, translations paused")

    def set_online(self) -> None:
        self.connection_changed(True)

    def set_offline(self) -> None:
        self.connection_changed(False)

    def observe(self, listener) -> Observer[bool]:
        """Call ``listener(new, old)`` on every transition."""
        return self._state.observe(listener)

    def listen(self, bus: EventBus) -> None:
        """Follow ``connectivity.changed`` events published on ``bus``."""
        self.stop_listening()
        self._bus = bus
        self._subscription = bus.subscribe(CONNECTIVITY_CHANGED, self._on_event)

    def stop_listening(self) -> None:
        if self._bus is not None and self._subscription is not None:
            self._bus.unsubscribe(self._subscription)
        self._bus = None
        self._subscription = None

    def _on_event(self, event: Event) -> None:
        online = event.payload.get("online")
        if isinstance(online, bool):
            self.connection_changed(online)
        else:
            logger.warning(f"Ignoring connectivity event without boolean 'online': {event.payload}")

    async def probe(
        self,
        url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ) -> bool:
        """
        Check reachability with a HEAD request and record the result.

        Any HTTP response counts as reachable; only transport errors mean offline.
        """
        try:
            if client is not None:
                await client.head(url)
            else:
                async with httpx.AsyncClient(timeout=timeout) as c:
                    await c.head(url)
            reachable = True
        except httpx.HTTPError as e:
            logger.debug(f"Reachability probe to {url} failed: {e}")
            reachable = False

        self.connection_changed(reachable)
        return reachable
