"""Request and action models.

A GenerationRequest asks for one site-description input to be converted
into a world file and a navigation-graph directory.  The registrar turns
each request into an immutable ActionSpec that the host build graph
records; a PackageSpec groups the requests discovered under one root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from rmf_site_gen.config import NAV_GRAPHS_DIRNAME, PACKAGE_WORLD_EXTENSION, WORLDS_DIRNAME

ActionKind = Literal["site", "package"]


class GenerationRequest(BaseModel):
    """One validated request to generate a single site."""

    model_config = ConfigDict(frozen=True)

    input_path: Path
    """Site-description file; only its path, mtime and existence matter."""

    output_world_path: Path
    output_nav_dir: Path

    extra_dependencies: tuple[str, ...] = ()
    """Paths or action identifiers that must be up to date first."""


class PlannedPaths(BaseModel):
    """Directories prepared for a request before its action is registered."""

    model_config = ConfigDict(frozen=True)

    world_dir: Path
    nav_dir: Path


class PackageSpec(BaseModel):
    """A batch of site generations sharing one package output root."""

    model_config = ConfigDict(frozen=True)

    input_root: Path
    output_package_dir: Path
    package_name: str
    extra_dependencies: tuple[str, ...] = ()

    @property
    def worlds_dir(self) -> Path:
        return self.output_package_dir / WORLDS_DIRNAME

    @property
    def nav_graphs_dir(self) -> Path:
        return self.output_package_dir / NAV_GRAPHS_DIRNAME

    @property
    def package_world_path(self) -> Path:
        return self.worlds_dir / f"{self.package_name}{PACKAGE_WORLD_EXTENSION}"


class ActionSpec(BaseModel):
    """A unit of work as seen by the host build graph."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    kind: ActionKind = "site"
    command: tuple[str, ...] = ()
    """Argument vector; empty for aggregate actions."""

    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()
    comment: str = ""


class ActionHandle(BaseModel):
    """Returned by a build graph for each registered action."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    kind: ActionKind = "site"
    outputs: tuple[str, ...] = ()


class PackageResult(BaseModel):
    """Everything registered for one map package."""

    spec: PackageSpec
    package: ActionHandle
    sites: list[ActionHandle] = Field(default_factory=list)
    inputs: list[Path] = Field(default_factory=list)
