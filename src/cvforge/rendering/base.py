from __future__ import annotations

from abc import ABC, abstractmethod

from cvforge.core.models import OutputKind
from cvforge.rendering.context import RenderContext


class BaseRenderer(ABC):
    """Base class for all output backends."""

    @property
    @abstractmethod
    def output(self) -> OutputKind:
        """The encoding this backend produces."""

    @abstractmethod
    async def render(self, context: RenderContext) -> bytes:
        """Render *context* to the encoded document."""

    async def close(self) -> None:
        """Release external resources. Backends without any need not override."""
