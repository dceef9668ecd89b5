"""Path planning - derive output locations and make sure they exist.

Directory preparation runs at configuration time so the build action can
assume its output locations are writable.  It only ever creates missing
directories, so repeating it across reconfiguration runs is harmless.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rmf_site_gen.errors import DirectoryCreateFailed
from rmf_site_gen.models.request import GenerationRequest, PlannedPaths

logger = logging.getLogger(__name__)


def plan_site_paths(request: GenerationRequest) -> PlannedPaths:
    """Return the directories a request's outputs live in."""
    return PlannedPaths(
        world_dir=request.output_world_path.parent,
        nav_dir=request.output_nav_dir,
    )


def prepare_directories(*dirs: Path) -> None:
    """Create each directory (with parents) if it does not exist yet.

    Raises
    ------
    DirectoryCreateFailed
        If the filesystem refuses, e.g. permission denied or a path
        component that exists as a regular file.
    """
    for directory in dirs:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateFailed(directory, exc.strerror or str(exc)) from exc
        logger.debug("Prepared directory %s", directory)


class PathPlanner:
    """Plans and prepares the output directories of generation requests."""

    def prepare(self, request: GenerationRequest) -> PlannedPaths:
        planned = plan_site_paths(request)
        prepare_directories(planned.world_dir, planned.nav_dir)
        return planned
