"""NinjaWriter - renders recorded actions as a ``build.ninja`` file.

Every site action becomes a ``build`` statement on the shared
``rmf_site_generate`` rule plus a ``phony`` alias carrying its identifier,
so both paths and identifiers can be used as dependencies.  Package
actions become ``phony`` aggregates.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from rmf_site_gen.graph.memory import InMemoryBuildGraph
from rmf_site_gen.models.request import ActionSpec

logger = logging.getLogger(__name__)

RULE_NAME = "rmf_site_generate"

_HEADER = """\
# Generated by rmf_site_gen. Do not edit; re-run configuration instead.
ninja_required_version = 1.5

rule {rule}
  command = $cmd
  description = $desc
  restat = 1
"""


def escape_path(path: str) -> str:
    """Escape a path for use in a ninja ``build`` line."""
    return path.replace("$", "$$").replace(" ", "$ ").replace(":", "$:")


def escape_value(value: str) -> str:
    """Escape a variable value; ninja values cannot span lines."""
    if "\n" in value:
        raise ValueError(f"Ninja variable values cannot contain newlines: {value!r}")
    return value.replace("$", "$$")


def _paths(items: tuple[str, ...] | list[str]) -> str:
    return " ".join(escape_path(i) for i in items)


class NinjaWriter:
    """Serialise an :class:`InMemoryBuildGraph` into ninja syntax."""

    def __init__(self, graph: InMemoryBuildGraph) -> None:
        self.graph = graph

    def render(self) -> str:
        lines = [_HEADER.format(rule=RULE_NAME)]
        for spec in self.graph.actions:
            if spec.kind == "package":
                lines.append(self._render_aggregate(spec))
            else:
                lines.append(self._render_site(spec))
        return "\n".join(lines)

    def write(self, path: str | Path) -> Path:
        """Write the rendered file, creating its directory.  Returns the path."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.render(), encoding="utf-8")
        logger.info("Wrote %s (%d actions)", out, len(self.graph))
        return out

    @staticmethod
    def _render_site(spec: ActionSpec) -> str:
        explicit, implicit = spec.inputs[:1], spec.inputs[1:]
        build = f"build {_paths(spec.outputs)}: {RULE_NAME} {_paths(explicit)}"
        if implicit:
            build += f" | {_paths(implicit)}"
        return "\n".join([
            build,
            f"  cmd = {escape_value(shlex.join(spec.command))}",
            f"  desc = {escape_value(spec.comment or spec.identifier)}",
            f"build {escape_path(spec.identifier)}: phony {_paths(spec.outputs)}",
            "",
        ])

    @staticmethod
    def _render_aggregate(spec: ActionSpec) -> str:
        build = f"build {escape_path(spec.identifier)}: phony"
        if spec.inputs:
            build += f" {_paths(spec.inputs)}"
        return build + "\n"
