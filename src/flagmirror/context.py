"""Request scoped dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .adapters import ApiAdapter, SdkAdapter
from .models import EvaluationContext, default_context
from .observers import Observers
from .store import Store


@dataclass(frozen=True)
class DevContext:
    """Store, adapters and observers used by one request.

    ``default_context`` is used by create_project when no context is given.
    Build one per request. A long running server passes the same Observers
    instance to every context it builds.
    """

    store: Store
    api: ApiAdapter
    sdk: SdkAdapter
    observers: Observers = field(default_factory=Observers)
    default_context: EvaluationContext = field(default_factory=default_context)

    def with_observers(self, observers: Observers) -> DevContext:
        return replace(self, observers=observers)
