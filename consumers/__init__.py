from consumers.base import DeliveryError, DeliverySink
from consumers.console import ConsoleSink
from consumers.discord_sink import DiscordChannelSink

__all__ = ["ConsoleSink", "DeliveryError", "DeliverySink", "DiscordChannelSink"]
