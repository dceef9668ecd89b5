"""rmf_site_gen - build rules for generating RMF worlds and nav graphs from site files."""

__version__ = "0.1.0"

from rmf_site_gen.api.facade import SiteGen
from rmf_site_gen.config import BuildContext, SiteGenSettings, load_settings
from rmf_site_gen.errors import (
    DirectoryCreateFailed,
    DuplicateActionIdentifier,
    InputNotFound,
    InvalidArgument,
    MissingArgument,
    NoInputsFound,
    SiteGenError,
)
from rmf_site_gen.generation.assembler import PackageAssembler
from rmf_site_gen.generation.planner import PathPlanner
from rmf_site_gen.generation.registrar import ActionRegistrar
from rmf_site_gen.graph.base import BuildGraph
from rmf_site_gen.graph.memory import InMemoryBuildGraph
from rmf_site_gen.graph.ninja import NinjaWriter
from rmf_site_gen.models.request import (
    ActionHandle,
    ActionSpec,
    GenerationRequest,
    PackageResult,
    PackageSpec,
)

__all__ = [
    "__version__",
    # Facade
    "SiteGen",
    # Configuration
    "BuildContext",
    "SiteGenSettings",
    "load_settings",
    # Pipeline
    "ActionRegistrar",
    "PackageAssembler",
    "PathPlanner",
    # Build graph
    "BuildGraph",
    "InMemoryBuildGraph",
    "NinjaWriter",
    # Models
    "ActionHandle",
    "ActionSpec",
    "GenerationRequest",
    "PackageResult",
    "PackageSpec",
    # Errors
    "DirectoryCreateFailed",
    "DuplicateActionIdentifier",
    "InputNotFound",
    "InvalidArgument",
    "MissingArgument",
    "NoInputsFound",
    "SiteGenError",
]
