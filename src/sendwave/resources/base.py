"""Request state shared by every resource.

Each resource owns a :class:`RequestState` with two observable fields,
``loading`` and ``error``, and wraps every operation in
:meth:`Resource._track`:

1. ``loading`` becomes ``True`` and ``error`` is cleared.
2. Exactly one request client call runs.
3. On failure ``error`` receives the exception message (or the
   operation's fallback text when the message is empty) and the exception
   is re-raised unchanged.
4. ``loading`` returns to ``False`` whatever the outcome.

Observers registered with :meth:`RequestState.subscribe` are notified on
every change, which is how a UI layer would re-render.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from sendwave.client.request_client import RequestClient
from sendwave.exceptions import ResponseParseError

ModelT = TypeVar("ModelT", bound=BaseModel)

StateListener = Callable[["RequestState"], None]


@dataclass
class RequestState:
    """Loading and error flags of one resource."""

    loading: bool = False
    error: Optional[str] = None
    _listeners: list[StateListener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* after every change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def update(self, **changes: Any) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        for listener in list(self._listeners):
            listener(self)


class Resource:
    """Base class for API resources built on a :class:`RequestClient`."""

    def __init__(self, client: RequestClient) -> None:
        self._client = client
        self.state = RequestState()

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    @asynccontextmanager
    async def _track(self, fallback_message: str) -> AsyncIterator[None]:
        self.state.update(loading=True, error=None)
        try:
            yield
        except Exception as exc:
            self.state.update(error=str(exc) or fallback_message)
            raise
        finally:
            self.state.update(loading=False)


def validate_as(model: type[ModelT], data: Any) -> ModelT:
    """Validate *data* into *model*, reporting mismatches as parse errors."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ResponseParseError(
            f"Unexpected {model.__name__} payload from the server: "
            f"{exc.error_count()} validation error(s)",
            details=exc.errors(include_url=False),
        ) from exc


def validate_list(model: type[ModelT], data: Any) -> list[ModelT]:
    """Validate a JSON array of *model* objects."""
    if not isinstance(data, list):
        raise ResponseParseError(
            f"Expected a list of {model.__name__} from the server, got {type(data).__name__}"
        )
    return [validate_as(model, item) for item in data]
