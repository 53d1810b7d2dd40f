"""A middleware that logs message events."""

from __future__ import annotations

from typing import Any

from ..events import MessageCreate, MessageDelete, MessageDeleteBulk, MessageUpdate
from ..logger import Logger

__all__ = ["LogFilter"]


class LogFilter:
    """Logs message events and passes them on unchanged."""

    def __init__(self, logger: Logger) -> None:
        self.log = logger

    def log_msg(self, event: Any) -> Any:
        """Log a message event and return it.

        Formats:
          created/updated: $user created message{id} $content
          deleted:         message{id} was deleted
          bulk deleted:    messages{len: 2, ids: [1,2]} was deleted
        """
        match event:
            case MessageCreate():
                change = "created"
            case MessageUpdate():
                change = "updated"
            case MessageDelete():
                self.log.info("message{" + str(event.message_id) + "}", "was deleted")
                return event
            case MessageDeleteBulk():
                if not event.message_ids:
                    self.log.info("0 messages was deleted")
                    return event
                ids = ",".join(str(message_id) for message_id in event.message_ids)
                summary = f"messages{{len: {len(event.message_ids)}, ids: [{ids}]}}"
                self.log.info(summary, "was deleted")
                return event
            case _:
                self.log.error("unable to log msg event", event)
                return event

        msg = event.message
        if msg is None:
            self.log.error("unable to log msg event", event)
            return event
        user = str(msg.author) if msg.author is not None else ""
        self.log.info(user, change, "message{" + str(msg.id) + "}", msg.content)
        return event