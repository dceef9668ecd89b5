"""Argument validation for site and package generation requests.

Validation is pure: paths are resolved against the build context but the
filesystem is never touched here.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from rmf_site_gen.config import BuildContext
from rmf_site_gen.errors import InvalidArgument, MissingArgument
from rmf_site_gen.models.request import GenerationRequest, PackageSpec

SITE_FUNCTION = "rmf_site_generate"
PACKAGE_FUNCTION = "rmf_site_generate_map_package"

SITE_PARAMETERS = ("INPUT", "OUTPUT_WORLD", "OUTPUT_NAV_DIR", "DEPENDS")
PACKAGE_PARAMETERS = ("INPUT", "OUTPUT_PACKAGE_DIR", "PACKAGE_NAME", "DEPENDS")


def _as_text(value: Any) -> str:
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    return str(value)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return not _as_text(value).strip()


def _require(function: str, params: dict[str, Any], name: str) -> str:
    value = params.get(name)
    if _is_empty(value):
        raise MissingArgument(function, name)
    return _as_text(value)


def _reject_unknown(function: str, params: dict[str, Any], known: tuple[str, ...]) -> None:
    for name in params:
        if name not in known:
            raise InvalidArgument(function, name, "is not a recognized parameter.")


def normalize_depends(depends: Any) -> tuple[str, ...]:
    """Flatten DEPENDS into an ordered tuple without blanks or duplicates."""
    if depends is None:
        return ()
    if isinstance(depends, (str, os.PathLike)):
        items: Iterable[Any] = [depends]
    else:
        items = depends

    seen: dict[str, None] = {}
    for item in items:
        if _is_empty(item):
            continue
        seen.setdefault(_as_text(item), None)
    return tuple(seen)


def validate_site_args(context: BuildContext, **params: Any) -> GenerationRequest:
    """Validate ``rmf_site_generate`` parameters.

    Required: INPUT, OUTPUT_WORLD, OUTPUT_NAV_DIR.  Optional: DEPENDS.
    Raises MissingArgument for the first absent or empty required field.
    """
    _reject_unknown(SITE_FUNCTION, params, SITE_PARAMETERS)

    input_raw = _require(SITE_FUNCTION, params, "INPUT")
    world_raw = _require(SITE_FUNCTION, params, "OUTPUT_WORLD")
    nav_raw = _require(SITE_FUNCTION, params, "OUTPUT_NAV_DIR")

    input_path = context.source_path(input_raw)
    world_path = context.binary_path(world_raw)
    nav_dir = context.binary_path(nav_raw)

    if input_path == world_path:
        raise InvalidArgument(SITE_FUNCTION, "OUTPUT_WORLD", "must differ from INPUT.")
    if input_path == nav_dir:
        raise InvalidArgument(SITE_FUNCTION, "OUTPUT_NAV_DIR", "must differ from INPUT.")

    return GenerationRequest(
        input_path=input_path,
        output_world_path=world_path,
        output_nav_dir=nav_dir,
        extra_dependencies=normalize_depends(params.get("DEPENDS")),
    )


def validate_package_args(context: BuildContext, **params: Any) -> PackageSpec:
    """Validate ``rmf_site_generate_map_package`` parameters.

    Required: INPUT, OUTPUT_PACKAGE_DIR, PACKAGE_NAME.  Optional: DEPENDS.
    """
    _reject_unknown(PACKAGE_FUNCTION, params, PACKAGE_PARAMETERS)

    input_raw = _require(PACKAGE_FUNCTION, params, "INPUT")
    package_dir_raw = _require(PACKAGE_FUNCTION, params, "OUTPUT_PACKAGE_DIR")
    package_name = _require(PACKAGE_FUNCTION, params, "PACKAGE_NAME")

    if Path(package_name).name != package_name:
        raise InvalidArgument(
            PACKAGE_FUNCTION, "PACKAGE_NAME", f"must be a plain name, got '{package_name}'."
        )

    return PackageSpec(
        input_root=context.source_path(input_raw),
        output_package_dir=context.binary_path(package_dir_raw),
        package_name=package_name,
        extra_dependencies=normalize_depends(params.get("DEPENDS")),
    )
