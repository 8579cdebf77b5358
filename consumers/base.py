from __future__ import annotations

from abc import ABC, abstractmethod


class DeliveryError(Exception):
    """A message could not be handed to its destination channel."""


class DeliverySink(ABC):
    """Destination for relayed messages.

    Sinks are best-effort: a failed post raises DeliveryError and the poll
    cycle decides what to do with it. Sinks never retry on their own, and
    rendered text must never notify channel members.
    """

    @abstractmethod
    async def deliver(self, destination: int, text: str) -> None:
        """Post ``text`` to ``destination`` as a plain message."""
