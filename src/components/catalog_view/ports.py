"""
Catalog view component - Port interfaces.

The engine only consumes snapshots and emits structured views; fetching and
drawing belong to the collaborators behind these ports.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .models import ViewOutput


class RecordSourcePort(Protocol):
    """Transport interface supplying a deserialized snapshot."""

    def fetch_snapshot(self) -> Mapping[str, Any]:
        """Fetch the payload holding the record list."""
        ...


class RendererPort(Protocol):
    """Renderer interface drawing a computed view."""

    def render(self, view: ViewOutput) -> None:
        """Draw headers, rows and pagination controls."""
        ...
