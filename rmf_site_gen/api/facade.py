"""SiteGen - the single entry point for configuring site generation.

Usage::

    from rmf_site_gen import SiteGen

    gen = SiteGen.from_dirs(source_dir=".", binary_dir="build")
    gen.rmf_site_generate(
        INPUT="maps/office.building.yaml",
        OUTPUT_WORLD="maps/office.world",
        OUTPUT_NAV_DIR="maps/office/nav_graphs",
    )
    gen.rmf_site_generate_map_package(
        INPUT="maps",
        OUTPUT_PACKAGE_DIR="office_maps",
        PACKAGE_NAME="office_maps",
    )
    gen.write_ninja("build/build.ninja")

One SiteGen instance is one configuration pass: identifiers must be unique
across everything it registers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rmf_site_gen.config import BuildContext, SiteGenSettings
from rmf_site_gen.generation.assembler import PackageAssembler
from rmf_site_gen.generation.planner import PathPlanner
from rmf_site_gen.generation.registrar import ActionRegistrar
from rmf_site_gen.generation.validator import validate_package_args, validate_site_args
from rmf_site_gen.graph.base import BuildGraph
from rmf_site_gen.graph.memory import InMemoryBuildGraph
from rmf_site_gen.graph.ninja import NinjaWriter
from rmf_site_gen.models.request import ActionHandle, PackageResult

logger = logging.getLogger(__name__)


class SiteGen:
    """Unified API over the validate -> plan -> register pipeline.

    Parameters
    ----------
    context:
        Source, build and maps roots.  Defaults to the current directory.
    settings:
        Tool name and discovery behaviour.
    graph:
        Host build graph; an :class:`InMemoryBuildGraph` when omitted.
    """

    def __init__(
        self,
        context: BuildContext | None = None,
        settings: SiteGenSettings | None = None,
        graph: BuildGraph | None = None,
    ) -> None:
        self.context = context or BuildContext.create()
        self.settings = settings or SiteGenSettings()
        self.graph = graph if graph is not None else InMemoryBuildGraph()
        self.planner = PathPlanner()
        self.registrar = ActionRegistrar(self.graph, self.settings)
        self.assembler = PackageAssembler(self.context, self.registrar, self.planner)

    @classmethod
    def from_dirs(
        cls,
        source_dir: str | Path | None = None,
        binary_dir: str | Path | None = None,
        maps_root: str | Path | None = None,
        settings: SiteGenSettings | None = None,
    ) -> SiteGen:
        context = BuildContext.create(source_dir, binary_dir, maps_root)
        return cls(context=context, settings=settings)

    def rmf_site_generate(self, **params: Any) -> ActionHandle:
        """Register world and nav-graph generation for one site input.

        Keywords: INPUT, OUTPUT_WORLD, OUTPUT_NAV_DIR (required), DEPENDS.
        Output directories exist on return, before the action ever runs.
        """
        request = validate_site_args(self.context, **params)
        self.planner.prepare(request)
        return self.registrar.register_site(request)

    def rmf_site_generate_map_package(self, **params: Any) -> PackageResult:
        """Register generation for every site file under INPUT.

        Keywords: INPUT, OUTPUT_PACKAGE_DIR, PACKAGE_NAME (required), DEPENDS.
        """
        spec = validate_package_args(self.context, **params)
        return self.assembler.assemble(spec)

    def write_ninja(self, path: str | Path) -> Path:
        """Write the recorded graph as a ninja file."""
        if not isinstance(self.graph, InMemoryBuildGraph):
            raise TypeError(
                f"write_ninja needs an InMemoryBuildGraph, not {type(self.graph).__name__}"
            )
        return NinjaWriter(self.graph).write(path)
