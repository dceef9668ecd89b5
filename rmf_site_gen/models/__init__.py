"""Pydantic models shared by the generation pipeline."""

from rmf_site_gen.models.request import (
    ActionHandle,
    ActionSpec,
    GenerationRequest,
    PackageResult,
    PackageSpec,
    PlannedPaths,
)

__all__ = [
    "ActionHandle",
    "ActionSpec",
    "GenerationRequest",
    "PackageResult",
    "PackageSpec",
    "PlannedPaths",
]
