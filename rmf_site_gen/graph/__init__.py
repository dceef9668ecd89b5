"""Host build graph adapters."""

from rmf_site_gen.graph.base import BuildGraph
from rmf_site_gen.graph.memory import InMemoryBuildGraph
from rmf_site_gen.graph.ninja import NinjaWriter

__all__ = ["BuildGraph", "InMemoryBuildGraph", "NinjaWriter"]
