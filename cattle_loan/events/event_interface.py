"""
Event interface for the cattle loan application.

The submission workflow reports its outcomes as events so the presentation
layer can render notifications without being coupled to the workflow.
"""

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from cattle_loan.config.logging_config import get_logger
from cattle_loan.utils.error_handling import safe_execute

logger = get_logger(__name__)


class EventType(Enum):
    """Types of events that can be emitted by the event bus."""
    
    # Submission workflow events
    SUBMISSION_STATE_CHANGED = "submission.state_changed"
    VALIDATION_FAILED = "submission.validation_failed"
    SUBMISSION_COMPLETED = "submission.completed"
    
    # Form events
    FORM_RESET = "form.reset"
    
    # Catch-all for unknown events
    UNKNOWN = "unknown"
    
    @classmethod
    def from_string(cls, event_type_str: str) -> 'EventType':
        """Convert a string to an EventType enum value."""
        try:
            return next(e for e in cls if e.value == event_type_str)
        except StopIteration:
            logger.warning(f"Unknown event type: {event_type_str}")
            return cls.UNKNOWN


@dataclass
class Event:
    """Base class for all events in the system."""
    
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to a dictionary."""
        result = asdict(self)
        result['type'] = self.type.value
        return result
    
    def to_json(self) -> str:
        """Convert the event to a JSON string."""
        return json.dumps(self.to_dict(), default=str)


# Type for event handlers
EventHandlerType = Callable[[Event], None]


class EventEmitter:
    """
    Event emitter for publishing and subscribing to events.
    
    A handler that raises is logged and skipped; the remaining handlers
    still receive the event.
    """
    
    def __init__(self):
        """Initialize the event emitter."""
        self._handlers: Dict[EventType, List[EventHandlerType]] = {}
        self._wildcard_handlers: List[EventHandlerType] = []
    
    def on(self, event_type: Union[EventType, str], handler: EventHandlerType) -> None:
        """
        Register a handler for a specific event type.
        
        Args:
            event_type: The type of event to handle
            handler: The callback function to invoke when the event occurs
        """
        if isinstance(event_type, str):
            event_type = EventType.from_string(event_type)
        
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Registered handler for event type: {event_type.value}")
    
    def on_any(self, handler: EventHandlerType) -> None:
        """
        Register a handler for all event types.
        
        Args:
            handler: The callback function to invoke when any event occurs
        """
        self._wildcard_handlers.append(handler)
        logger.debug("Registered wildcard event handler")
    
    def off(self, event_type: Union[EventType, str], handler: Optional[EventHandlerType] = None) -> None:
        """
        Remove a handler for a specific event type.
        
        Args:
            event_type: The type of event
            handler: The handler to remove. If None, removes all handlers for the event type.
        """
        if isinstance(event_type, str):
            event_type = EventType.from_string(event_type)
        
        if event_type not in self._handlers:
            return
        if handler is None:
            self._handlers[event_type] = []
            logger.debug(f"Removed all handlers for event type: {event_type.value}")
            return
        try:
            self._handlers[event_type].remove(handler)
            logger.debug(f"Removed handler for event type: {event_type.value}")
        except ValueError:
            logger.warning(f"Handler not found for event type: {event_type.value}")
    
    def emit(self, event: Event) -> None:
        """
        Emit an event to all registered handlers.
        
        Args:
            event: The event to emit
        """
        for handler in list(self._handlers.get(event.type, [])):
            safe_execute(
                handler, event,
                error_message=f"Error in event handler for {event.type.value}"
            )
        
        for handler in list(self._wildcard_handlers):
            safe_execute(
                handler, event,
                error_message=f"Error in wildcard event handler for {event.type.value}"
            )


# Global event emitter instance
event_bus = EventEmitter()
