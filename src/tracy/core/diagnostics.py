"""Circular dependency reporting.

Self-referencing leads never abort a run. They are logged through
structlog and forwarded to an optional handler supplied by the caller.
"""

from __future__ import annotations

import structlog

from tracy.contracts.diagnostics import CircularDependency
from tracy.contracts.types import CircularDependencyHandler

logger = structlog.get_logger(__name__)


def shorten_paths(suspect: str, lead: str, depth: int = 3) -> tuple[str, str]:
    """Strip the leading directories shared by both ids, keeping `depth` segments.

    Only path-like ids deeper than `depth` segments are shortened; anything
    else is returned unchanged.

    >>> shorten_paths("/repo/app/src/lib/a.js", "/repo/app/src/lib/a.js")
    ('src/lib/a.js', 'src/lib/a.js')
    """
    segments = suspect.split("/")
    if depth == 0 or len(segments) <= depth:
        return suspect, lead

    common = "/".join(segments[:-depth]) + "/"
    return suspect.removeprefix(common), lead.removeprefix(common)


class CircularDependencyReporter:
    """Logs circular dependencies and forwards them to an optional handler.

    A failing handler is logged and otherwise ignored: diagnostics must not
    change the case file being built.
    """

    def __init__(self, handler: CircularDependencyHandler | None = None, *, path_depth: int = 3) -> None:
        self._handler = handler
        self._path_depth = path_depth
        self.reported: list[CircularDependency] = []

    def __call__(self, event: CircularDependency) -> None:
        self.reported.append(event)
        suspect, lead = shorten_paths(event.suspect, event.lead, self._path_depth)
        logger.warning("Skipping circular dependency", lead=lead, suspect=suspect, root=event.root)

        if self._handler is None:
            return
        try:
            self._handler(event)
        except Exception as e:
            logger.warning(
                "Circular dependency handler failed",
                suspect=event.suspect,
                lead=event.lead,
                error=str(e),
            )
