"""ActionRegistrar - turns validated requests into build graph actions.

Identifiers are derived from the input file name, so the same input always
maps to the same action across reconfiguration runs.  A configuration pass
may register each identifier only once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from rmf_site_gen.config import EXPORT_NAV_FLAG, EXPORT_WORLD_FLAG, SiteGenSettings
from rmf_site_gen.errors import DuplicateActionIdentifier, InputNotFound
from rmf_site_gen.generation.naming import (
    final_component,
    package_identifier,
    site_identifier,
)
from rmf_site_gen.generation.validator import SITE_FUNCTION
from rmf_site_gen.graph.base import BuildGraph
from rmf_site_gen.models.request import (
    ActionHandle,
    ActionSpec,
    GenerationRequest,
    PackageSpec,
)

logger = logging.getLogger(__name__)


def build_command(tool: str, request: GenerationRequest) -> tuple[str, ...]:
    """Return the argument vector of the external conversion tool."""
    return (
        tool,
        str(request.input_path),
        EXPORT_WORLD_FLAG,
        str(request.output_world_path),
        EXPORT_NAV_FLAG,
        str(request.output_nav_dir),
    )


class ActionRegistrar:
    """Registers generation actions into a :class:`BuildGraph`.

    Parameters
    ----------
    graph:
        Host build graph receiving the actions.
    settings:
        Provides the conversion tool name.
    """

    def __init__(self, graph: BuildGraph, settings: SiteGenSettings | None = None) -> None:
        self.graph = graph
        self.settings = settings or SiteGenSettings()
        self._registered: dict[str, ActionHandle] = {}

    @property
    def registered(self) -> list[ActionHandle]:
        return list(self._registered.values())

    def build_site_action(self, request: GenerationRequest) -> ActionSpec:
        """Derive the action for *request* without registering it."""
        return ActionSpec(
            identifier=site_identifier(request.input_path, self.settings.site_suffix),
            kind="site",
            command=build_command(self.settings.tool, request),
            inputs=(str(request.input_path), *request.extra_dependencies),
            outputs=(str(request.output_world_path), str(request.output_nav_dir)),
            comment=f"Generating world and nav graphs from {final_component(request.input_path)}",
        )

    def build_package_action(
        self,
        spec: PackageSpec,
        site_handles: Iterable[ActionHandle],
    ) -> ActionSpec:
        """Derive the aggregate action that stands for a whole package."""
        inputs: list[str] = []
        for handle in site_handles:
            inputs.extend(handle.outputs)
        return ActionSpec(
            identifier=package_identifier(spec.package_name),
            kind="package",
            inputs=tuple(inputs),
            comment=f"Generating map package {spec.package_name}",
        )

    def check_available(self, identifiers: Iterable[str]) -> None:
        """Raise DuplicateActionIdentifier if any identifier is already taken."""
        for identifier in identifiers:
            if identifier in self._registered:
                raise DuplicateActionIdentifier(identifier, "registered earlier in this configuration")

    def register(self, spec: ActionSpec) -> ActionHandle:
        """Register *spec* once per configuration pass."""
        self.check_available([spec.identifier])
        handle = self.graph.register(spec)
        self._registered[spec.identifier] = handle
        logger.info("Registered %s action %s", spec.kind, spec.identifier)
        return handle

    def register_site(self, request: GenerationRequest) -> ActionHandle:
        """Build and register the action for a single site.

        Raises
        ------
        InputNotFound
            If the input file does not exist.
        """
        if not Path(request.input_path).is_file():
            raise InputNotFound(SITE_FUNCTION, request.input_path)
        return self.register(self.build_site_action(request))

    def register_package(
        self,
        spec: PackageSpec,
        site_handles: Iterable[ActionHandle],
    ) -> ActionHandle:
        return self.register(self.build_package_action(spec, site_handles))
