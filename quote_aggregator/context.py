import contextvars
from dataclasses import dataclass, replace

from ulid import ULID


@dataclass(frozen=True)
class ExecutionContext:
    """Immutable context describing the inbound event being handled.

    ExecutionContext lets log records emitted anywhere during the handling of
    an event be tied back to the workflow instance and the event that caused
    them.

    Attributes:
        correlation_id: The workflow instance id the current event belongs to.
            Remains constant for every quote of the same loan request.
        event_id: Identifier of the inbound event being processed. Taken from
            the transport envelope when it carries one.

    Examples:
        Create a context at the ingestion entry point:

        >>> ctx = ExecutionContext.create("123")
        >>> ctx.correlation_id
        '123'

        Attach the envelope's event id:

        >>> event_ctx = ctx.for_event("evt-1")
    """

    correlation_id: str | None = None
    event_id: str | None = None

    @classmethod
    def create(cls, correlation_id: str | None = None) -> "ExecutionContext":
        """Create a new context, typically at an ingestion entry point.

        Args:
            correlation_id: The workflow instance id, if known. The event id
                is generated and can be replaced with `for_event`.

        Returns:
            A new ExecutionContext instance.
        """
        return cls(correlation_id=correlation_id, event_id=str(ULID()))

    def for_event(self, event_id: str) -> "ExecutionContext":
        """Create a child context for a specific inbound event.

        The correlation_id is inherited.

        Args:
            event_id: The envelope id of the event being processed.

        Returns:
            A new ExecutionContext with event_id set.
        """
        return replace(self, event_id=event_id)

    def as_log_extra(self) -> dict[str, str]:
        """Return the populated fields for use as logging `extra`."""
        extra = {}
        if self.correlation_id is not None:
            extra["correlation_id"] = self.correlation_id
        if self.event_id is not None:
            extra["event_id"] = self.event_id
        return extra


_context: contextvars.ContextVar[ExecutionContext | None] = contextvars.ContextVar(
    "execution_context", default=None
)


def get_context() -> ExecutionContext:
    """Get the current execution context.

    If no context has been set, returns an empty ExecutionContext with all fields None.
    """
    ctx = _context.get()
    if ctx is None:
        return ExecutionContext()
    return ctx


def set_context(context: ExecutionContext) -> None:
    """Set the current execution context."""
    _context.set(context)


def clear_context() -> None:
    """Clear the current execution context."""
    _context.set(None)
