"""InMemoryBuildGraph - records registrations without a real build engine."""

from __future__ import annotations

import logging

from rmf_site_gen.errors import DuplicateActionIdentifier
from rmf_site_gen.graph.base import BuildGraph
from rmf_site_gen.models.request import ActionHandle, ActionSpec

logger = logging.getLogger(__name__)


class InMemoryBuildGraph(BuildGraph):
    """Ordered record of every registered action.

    Also serves as the source for build-file writers such as
    :class:`~rmf_site_gen.graph.ninja.NinjaWriter`.
    """

    def __init__(self) -> None:
        self._actions: dict[str, ActionSpec] = {}

    def register(self, spec: ActionSpec) -> ActionHandle:
        if spec.identifier in self._actions:
            raise DuplicateActionIdentifier(spec.identifier, "already present in build graph")
        self._actions[spec.identifier] = spec
        logger.debug("Recorded %s action %s", spec.kind, spec.identifier)
        return ActionHandle(identifier=spec.identifier, kind=spec.kind, outputs=spec.outputs)

    @property
    def actions(self) -> list[ActionSpec]:
        """Registered actions in registration order."""
        return list(self._actions.values())

    def get(self, identifier: str) -> ActionSpec | None:
        return self._actions.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def edges(self) -> list[tuple[str, str]]:
        """Return ``(upstream, downstream)`` pairs between registered actions.

        An edge exists when an action's input is another action's identifier
        or one of its outputs.
        """
        producers: dict[str, str] = {}
        for spec in self._actions.values():
            producers[spec.identifier] = spec.identifier
            for output in spec.outputs:
                producers[output] = spec.identifier

        result: list[tuple[str, str]] = []
        for spec in self._actions.values():
            upstream = {producers[i] for i in spec.inputs if i in producers}
            upstream.discard(spec.identifier)
            result.extend((u, spec.identifier) for u in sorted(upstream))
        return result
