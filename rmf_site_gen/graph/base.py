"""Abstract BuildGraph interface.

A build graph is the host build engine's view of the configuration: it
accepts action registrations and owns everything about executing them.
"""

from __future__ import annotations

import abc

from rmf_site_gen.models.request import ActionHandle, ActionSpec


class BuildGraph(abc.ABC):
    """Base class for all host build graph adapters."""

    @abc.abstractmethod
    def register(self, spec: ActionSpec) -> ActionHandle:
        """Record one action and return a handle other actions can depend on."""
