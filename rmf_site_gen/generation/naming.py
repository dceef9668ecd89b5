"""Name derivation for inputs, worlds, and action identifiers."""

from __future__ import annotations

from pathlib import PurePath

from rmf_site_gen.config import PACKAGE_IDENTIFIER, SITE_IDENTIFIER, SITE_SUFFIX


def final_component(path: str | PurePath) -> str:
    """Return the last path component, ignoring any directories."""
    return PurePath(path).name


def site_stem(path: str | PurePath, suffix: str = SITE_SUFFIX) -> str:
    """Return the file name without its site suffix, or its last extension.

    ``lobby.building.yaml`` -> ``lobby``, ``hq.v2.building.yaml`` -> ``hq.v2``,
    ``b.yaml`` -> ``b``.  Matches :func:`world_name` for site files, so
    distinct world names always give distinct identifiers.
    """
    name = final_component(path)
    if has_compound_suffix(name, suffix):
        return name[: -len(suffix)]
    return PurePath(name).stem


def has_compound_suffix(path: str | PurePath, suffix: str = SITE_SUFFIX) -> bool:
    """True when the final component ends with *suffix* and has a name before it."""
    name = final_component(path)
    return name.endswith(suffix) and len(name) > len(suffix)


def world_name(path: str | PurePath, suffix: str = SITE_SUFFIX) -> str:
    """Strip exactly the compound *suffix* from the final path component.

    ``sub/dir/office.building.yaml`` -> ``office``.

    Raises
    ------
    ValueError
        If the file name does not carry *suffix*.
    """
    name = final_component(path)
    if not has_compound_suffix(name, suffix):
        raise ValueError(f"'{name}' does not end with '{suffix}'")
    return name[: -len(suffix)]


def site_identifier(input_path: str | PurePath, suffix: str = SITE_SUFFIX) -> str:
    return SITE_IDENTIFIER.format(name=site_stem(input_path, suffix))


def package_identifier(package_name: str) -> str:
    return PACKAGE_IDENTIFIER.format(name=package_name)
