from __future__ import annotations

from typing import TYPE_CHECKING

from wsgen.core.result import Err, Ok, Result
from wsgen.services.base import BaseService

if TYPE_CHECKING:
    from pathlib import Path

    from wsgen.core.graph import Scheme
    from wsgen.services.graph_provider import GenerationError

__all__ = ["SchemeService"]


class SchemeService(BaseService):
    """Lists schemes of an already generated workspace (never generates)."""

    def list_schemes(
        self, path: Path, *, runnable: bool = False
    ) -> Result[list[Scheme], GenerationError]:
        loaded = self._graph_provider.load(path)
        if isinstance(loaded, Err):
            return loaded
        graph = loaded.value
        if runnable:
            return Ok(self._inspector.runnable_schemes(graph))
        return Ok(self._inspector.buildable_schemes(graph))
