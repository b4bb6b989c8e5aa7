"""Source positions for parse events."""

from __future__ import annotations

from typing import Any

from yamlorigin.models.errors import ParseError
from yamlorigin.models.origin import Origin


class PositionTracker:
    """Turns ruamel.yaml marks into 1-based origins for one resource.

    ruamel.yaml counts lines and columns from zero; origins are reported
    from one, matching what editors show.
    """

    def __init__(self, resource: str) -> None:
        self.resource = resource

    def origin_of(self, event: Any) -> Origin:
        """Return the origin of the first character of an event's node."""
        origin = self.origin_of_mark(getattr(event, "start_mark", None))
        if origin is None:
            raise ParseError(
                f"no source position recorded for {type(event).__name__}"
            )
        return origin

    def origin_of_mark(self, mark: Any) -> Origin | None:
        if mark is None:
            return None
        return Origin(resource=self.resource, line=mark.line + 1, column=mark.column + 1)
