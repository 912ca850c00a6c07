from umbra.events.broadcast import Broadcaster, Subscription
from umbra.events.bus import EventBus
from umbra.events.types import ColorsSaved, StylesheetFailed, StylesheetReconciled

__all__ = [
    "Broadcaster",
    "ColorsSaved",
    "EventBus",
    "StylesheetFailed",
    "StylesheetReconciled",
    "Subscription",
]
