"""PackageAssembler - batch generation of every site under a directory.

Usage::

    from rmf_site_gen.config import BuildContext
    from rmf_site_gen.generation import ActionRegistrar, PackageAssembler
    from rmf_site_gen.graph import InMemoryBuildGraph

    context = BuildContext.create(source_dir="src", binary_dir="build")
    registrar = ActionRegistrar(InMemoryBuildGraph())
    assembler = PackageAssembler(context, registrar)
    result = assembler.assemble(package_spec)

Discovery is recursive and sorted, so reconfiguring an unchanged tree
yields the same action set in the same order.  Each discovered file maps
to one independent site action; the package gets one aggregate action
that depends on all of them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rmf_site_gen.config import NAV_GRAPHS_DIRNAME, WORLD_EXTENSION, BuildContext
from rmf_site_gen.errors import DuplicateActionIdentifier, NoInputsFound
from rmf_site_gen.generation.naming import (
    has_compound_suffix,
    package_identifier,
    site_identifier,
    world_name,
)
from rmf_site_gen.generation.planner import PathPlanner, prepare_directories
from rmf_site_gen.generation.registrar import ActionRegistrar
from rmf_site_gen.generation.validator import PACKAGE_FUNCTION, validate_site_args
from rmf_site_gen.models.request import (
    ActionHandle,
    GenerationRequest,
    PackageResult,
    PackageSpec,
)

logger = logging.getLogger(__name__)


def discover_sites(input_root: Path, suffix: str) -> list[Path]:
    """Return every file under *input_root* whose name ends with *suffix*.

    Results are sorted by their POSIX path relative to *input_root*.  A
    matching file passed as *input_root* is returned on its own; a missing
    root yields an empty list.
    """
    if input_root.is_file():
        return [input_root] if has_compound_suffix(input_root, suffix) else []
    if not input_root.is_dir():
        logger.debug("Input root %s does not exist", input_root)
        return []

    found = [
        path
        for path in input_root.rglob(f"*{suffix}")
        if path.is_file() and has_compound_suffix(path, suffix)
    ]
    return sorted(found, key=lambda p: p.relative_to(input_root).as_posix())


def site_outputs(maps_root: Path, name: str) -> tuple[Path, Path]:
    """Return ``(world_file, nav_dir)`` for a site called *name*."""
    return (
        maps_root / f"{name}{WORLD_EXTENSION}",
        maps_root / name / NAV_GRAPHS_DIRNAME,
    )


class PackageAssembler:
    """Discovers site inputs and runs each through plan and register.

    Parameters
    ----------
    context:
        Supplies ``maps_root``, the per-site output root.
    registrar:
        Registrar shared with any single-site calls of the same pass.
    planner:
        Optional PathPlanner; a default one is created otherwise.
    """

    def __init__(
        self,
        context: BuildContext,
        registrar: ActionRegistrar,
        planner: PathPlanner | None = None,
    ) -> None:
        self.context = context
        self.registrar = registrar
        self.planner = planner or PathPlanner()

    @property
    def suffix(self) -> str:
        return self.registrar.settings.site_suffix

    def build_requests(self, spec: PackageSpec, inputs: list[Path]) -> list[GenerationRequest]:
        """Validate one site request per discovered input."""
        requests: list[GenerationRequest] = []
        for path in inputs:
            world_file, nav_dir = site_outputs(self.context.maps_root, world_name(path, self.suffix))
            requests.append(
                validate_site_args(
                    self.context,
                    INPUT=path,
                    OUTPUT_WORLD=world_file,
                    OUTPUT_NAV_DIR=nav_dir,
                    DEPENDS=spec.extra_dependencies,
                )
            )
        return requests

    def check_collisions(self, spec: PackageSpec, requests: list[GenerationRequest]) -> None:
        """Fail before registering anything if two inputs share an identifier."""
        owners: dict[str, Path] = {}
        for request in requests:
            identifier = site_identifier(request.input_path, self.suffix)
            previous = owners.get(identifier)
            if previous is not None:
                raise DuplicateActionIdentifier(
                    identifier,
                    f"both {previous} and {request.input_path} map to it",
                )
            owners[identifier] = request.input_path
        self.registrar.check_available(owners)
        self.registrar.check_available([package_identifier(spec.package_name)])

    def assemble(self, spec: PackageSpec) -> PackageResult:
        """Register every site under ``spec.input_root`` plus the package action.

        Raises
        ------
        NoInputsFound
            If nothing matches and strict discovery is enabled.
        InvalidArgument
            If a site's input would also be one of its outputs.
        DuplicateActionIdentifier
            If two inputs (or an earlier registration) share an identifier.
        DirectoryCreateFailed
            If an output directory cannot be created.
        """
        prepare_directories(spec.worlds_dir, spec.nav_graphs_dir)

        inputs = discover_sites(spec.input_root, self.suffix)
        if not inputs:
            if self.registrar.settings.strict_discovery:
                raise NoInputsFound(spec.input_root, self.suffix)
            logger.warning(
                "%s: no '*%s' files found under %s",
                PACKAGE_FUNCTION,
                self.suffix,
                spec.input_root,
            )

        requests = self.build_requests(spec, inputs)
        self.check_collisions(spec, requests)

        for request in requests:
            self.planner.prepare(request)

        handles: list[ActionHandle] = [self.registrar.register_site(r) for r in requests]
        package = self.registrar.register_package(spec, handles)

        logger.info(
            "Package %s: %d sites -> %s",
            spec.package_name,
            len(handles),
            spec.output_package_dir,
        )
        return PackageResult(spec=spec, package=package, sites=handles, inputs=inputs)
