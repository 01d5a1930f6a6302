"""
Message Bus

Views send booking lifecycle commands through the bus; the unit of
work publishes committed domain events to it.
"""

import logging
from typing import Any, Callable, Dict, List, Type

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Any], Any]
EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Routes commands to exactly one handler and events to any number

    Command handler errors reach the caller. Event handler errors are
    logged so that one failing subscriber does not starve the others.
    """

    def __init__(self):
        self._command_handlers: Dict[Type, CommandHandler] = {}
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def register_command_handler(self, command_type: Type, handler: CommandHandler):
        if command_type in self._command_handlers:
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._command_handlers[command_type] = handler

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe ``handler`` to ``event_type``; subscribing twice is a no-op"""
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def handle_command(self, command: Any) -> Any:
        name = type(command).__name__
        try:
            handler = self._command_handlers[type(command)]
        except KeyError:
            raise LookupError(f"No handler registered for command {name}") from None

        logger.info(f"Handling command: {name}")
        try:
            return handler(command)
        except Exception as e:
            logger.warning(f"Command {name} failed: {e}")
            raise

    def publish_events(self, events: List[DomainEvent]):
        for event in events:
            name = type(event).__name__
            handlers = self._event_handlers.get(type(event), [])
            if not handlers:
                logger.debug(f"No subscribers for {name}")
                continue

            logger.info(f"Publishing {name} (aggregate {event.aggregate_id})")
            for handler in handlers:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        f"Subscriber {getattr(handler, '__name__', handler)} failed on {name}: {e}",
                        exc_info=True,
                    )


message_bus = MessageBus()
