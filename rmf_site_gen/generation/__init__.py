"""Site generation pipeline: validate, plan, register, assemble.

A single site flows validator -> planner -> registrar; the package
assembler discovers many sites and runs each of them through the same
planner and registrar.
"""

from rmf_site_gen.generation.assembler import PackageAssembler, discover_sites
from rmf_site_gen.generation.planner import PathPlanner, prepare_directories
from rmf_site_gen.generation.registrar import ActionRegistrar
from rmf_site_gen.generation.validator import validate_package_args, validate_site_args

__all__ = [
    "ActionRegistrar",
    "PackageAssembler",
    "PathPlanner",
    "discover_sites",
    "prepare_directories",
    "validate_package_args",
    "validate_site_args",
]
