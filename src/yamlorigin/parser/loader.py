"""YAML loader that attaches source origins to every flattened value."""

from __future__ import annotations

import logging
import os
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import MarkedYAMLError, YAMLError

from yamlorigin.models.errors import ParseError, YAMLSafetyError
from yamlorigin.parser.composer import EventResolver
from yamlorigin.parser.flatten import flatten
from yamlorigin.parser.nodes import Node, ScalarNode
from yamlorigin.parser.positions import PositionTracker
from yamlorigin.resource import Resource, StringResource, as_resource
from yamlorigin.settings import LoaderSettings
from yamlorigin.tags import TagPolicy

logger = logging.getLogger("yamlorigin.loader")


class OriginTrackedYamlLoader:
    """Loads a YAML resource into one flat ``key -> value`` dict per document.

    Scalar values are ``OriginTrackedValue`` instances carrying the resource
    description, line and column they were read from; empty collections are
    ``EMPTY_MAP`` / ``EMPTY_LIST``. Documents whose root is empty are
    skipped, so an empty resource yields ``[]``.

    The loader keeps no state between calls: every ``load()`` re-reads the
    resource and builds fresh structures.
    """

    def __init__(
        self,
        resource: Resource | os.PathLike[str] | bytes | str,
        settings: LoaderSettings | None = None,
    ) -> None:
        self._resource = as_resource(resource)
        self._settings = settings if settings is not None else LoaderSettings()
        self._policy = TagPolicy(self._settings.allowed_tags)

    @property
    def resource(self) -> Resource:
        return self._resource

    # -- safety checks -------------------------------------------------------

    def _check_document_size(self, content: str) -> None:
        limit = self._settings.max_document_size
        if len(content) > limit:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {limit:,} limit)"
            )

    # -- public loading API --------------------------------------------------

    def load(self) -> list[dict[str, Any]]:
        content = self._resource.read_text()
        self._check_document_size(content)
        roots = self._resolve(content)
        documents = [flatten(root) for root in roots if not _is_empty(root)]
        logger.debug(
            "Loaded %d document(s) (%d skipped) from %s",
            len(documents),
            len(roots) - len(documents),
            self._resource.description,
        )
        return documents

    def _resolve(self, content: str) -> list[Node]:
        tracker = PositionTracker(self._resource.description)
        resolver = EventResolver(
            tracker,
            self._policy,
            max_nodes=self._settings.max_nodes,
            max_depth=self._settings.max_depth,
        )
        yaml = YAML(typ="safe", pure=True)
        try:
            return resolver.resolve(yaml.parse(content))
        except MarkedYAMLError as exc:
            mark = exc.problem_mark or exc.context_mark
            message = " ".join(part for part in (exc.context, exc.problem) if part)
            raise ParseError(message or str(exc), tracker.origin_of_mark(mark)) from exc
        except YAMLError as exc:
            raise ParseError(str(exc)) from exc


def _is_empty(root: Node) -> bool:
    return isinstance(root, ScalarNode) and root.value is None


def load(
    source: Resource | os.PathLike[str] | bytes | str,
    settings: LoaderSettings | None = None,
) -> list[dict[str, Any]]:
    """Load every document of ``source``; a ``str`` is YAML text."""
    return OriginTrackedYamlLoader(source, settings).load()


def load_string(
    content: str, name: str = "<string>", settings: LoaderSettings | None = None
) -> list[dict[str, Any]]:
    """Load YAML from a string, naming it ``name`` in origins."""
    return OriginTrackedYamlLoader(StringResource(content, name), settings).load()
