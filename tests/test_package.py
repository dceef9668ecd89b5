"""Tests for package assembly: discovery, per-site mapping, batch registration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from rmf_site_gen.config import BuildContext, SiteGenSettings
from rmf_site_gen.errors import (
    DirectoryCreateFailed,
    DuplicateActionIdentifier,
    InvalidArgument,
    NoInputsFound,
)
from rmf_site_gen.generation.assembler import PackageAssembler, discover_sites, site_outputs
from rmf_site_gen.generation.registrar import ActionRegistrar
from rmf_site_gen.graph.memory import InMemoryBuildGraph
from rmf_site_gen.models.request import PackageSpec

SUFFIX = ".building.yaml"


def _touch(path: Path, text: str = "levels: {}\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _assembler(
    tmp_path: Path,
    settings: SiteGenSettings | None = None,
) -> tuple[PackageAssembler, InMemoryBuildGraph, BuildContext]:
    context = BuildContext.create(source_dir=tmp_path / "src", binary_dir=tmp_path / "build")
    graph = InMemoryBuildGraph()
    registrar = ActionRegistrar(graph, settings)
    return PackageAssembler(context, registrar), graph, context


def _spec(context: BuildContext, name: str = "campus", **overrides: object) -> PackageSpec:
    fields: dict[str, object] = {
        "input_root": context.source_dir / "maps",
        "output_package_dir": context.binary_dir / "pkg",
        "package_name": name,
    }
    fields.update(overrides)
    return PackageSpec(**fields)


# ── Discovery ────────────────────────────────────────────────────────────────

class TestDiscovery:

    def test_recursive_and_sorted(self, tmp_path: Path):
        _touch(tmp_path / "x.building.yaml")
        _touch(tmp_path / "sub" / "deeper" / "z.building.yaml")
        _touch(tmp_path / "a" / "y.building.yaml")

        found = discover_sites(tmp_path, SUFFIX)
        assert [p.relative_to(tmp_path).as_posix() for p in found] == [
            "a/y.building.yaml",
            "sub/deeper/z.building.yaml",
            "x.building.yaml",
        ]

    def test_ignores_non_matching(self, tmp_path: Path):
        _touch(tmp_path / "site.building.yaml")
        _touch(tmp_path / "notes.yaml")
        _touch(tmp_path / "old.building.yml")
        _touch(tmp_path / ".building.yaml")
        (tmp_path / "dir.building.yaml").mkdir()

        found = discover_sites(tmp_path, SUFFIX)
        assert [p.name for p in found] == ["site.building.yaml"]

    def test_stable_across_calls(self, tmp_path: Path):
        for name in ("c", "a", "b"):
            _touch(tmp_path / name / f"{name}.building.yaml")
        assert discover_sites(tmp_path, SUFFIX) == discover_sites(tmp_path, SUFFIX)

    def test_single_file_root(self, tmp_path: Path):
        site = _touch(tmp_path / "lobby.building.yaml")
        assert discover_sites(site, SUFFIX) == [site]
        other = _touch(tmp_path / "lobby.rmf")
        assert discover_sites(other, SUFFIX) == []

    def test_missing_root(self, tmp_path: Path):
        assert discover_sites(tmp_path / "nope", SUFFIX) == []

    def test_site_outputs(self, tmp_path: Path):
        world, nav = site_outputs(tmp_path / "maps", "lobby")
        assert world == tmp_path / "maps" / "lobby.world"
        assert nav == tmp_path / "maps" / "lobby" / "nav_graphs"


# ── PackageAssembler ─────────────────────────────────────────────────────────

class TestPackageAssembler:

    def test_one_action_per_input(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        names = ["alpha", "beta", "gamma", "delta"]
        for i, name in enumerate(names):
            _touch(context.source_dir / "maps" / f"level{i}" / f"{name}.building.yaml")

        result = assembler.assemble(_spec(context))

        ids = [h.identifier for h in result.sites]
        assert len(ids) == len(names)
        assert len(set(ids)) == len(names)
        assert set(ids) == {f"generate_{n}_site" for n in names}
        assert len(result.inputs) == len(names)

    def test_per_site_paths_under_maps_root(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        site = _touch(context.source_dir / "maps" / "sub" / "office.building.yaml")

        assembler.assemble(_spec(context))

        action = graph.get("generate_office_site")
        world = context.maps_root / "office.world"
        nav = context.maps_root / "office" / "nav_graphs"
        assert action.inputs == (str(site),)
        assert action.outputs == (str(world), str(nav))
        assert world.parent.is_dir()
        assert nav.is_dir()
        assert not world.exists()

    def test_shared_package_dirs_created(self, tmp_path: Path):
        assembler, _, context = _assembler(tmp_path)
        _touch(context.source_dir / "maps" / "x.building.yaml")
        spec = _spec(context)

        result = assembler.assemble(spec)

        assert spec.worlds_dir.is_dir()
        assert spec.nav_graphs_dir.is_dir()
        assert result.spec.package_world_path == spec.worlds_dir / "campus.sdf"

    def test_depends_forwarded_to_each_site(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        _touch(context.source_dir / "maps" / "x.building.yaml")
        _touch(context.source_dir / "maps" / "y.building.yaml")

        assembler.assemble(_spec(context, extra_dependencies=("generate_textures",)))

        for identifier in ("generate_x_site", "generate_y_site"):
            assert graph.get(identifier).inputs[-1] == "generate_textures"

    def test_package_action_depends_on_all_sites(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        _touch(context.source_dir / "maps" / "x.building.yaml")
        _touch(context.source_dir / "maps" / "y.building.yaml")

        result = assembler.assemble(_spec(context))

        assert result.package.identifier == "generate_campus_package"
        assert graph.actions[-1].identifier == "generate_campus_package"
        upstream = {u for u, d in graph.edges() if d == "generate_campus_package"}
        assert upstream == {"generate_x_site", "generate_y_site"}

    def test_same_name_in_different_subdirectories(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        first = _touch(context.source_dir / "maps" / "east" / "a.building.yaml")
        second = _touch(context.source_dir / "maps" / "west" / "a.building.yaml")

        with pytest.raises(DuplicateActionIdentifier) as exc_info:
            assembler.assemble(_spec(context))

        assert exc_info.value.identifier == "generate_a_site"
        assert str(first) in str(exc_info.value)
        assert str(second) in str(exc_info.value)
        assert len(graph) == 0
        assert not (context.maps_root / "a").exists()

    def test_dotted_siblings_register_separately(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        _touch(context.source_dir / "maps" / "hq.v2.building.yaml")
        _touch(context.source_dir / "maps" / "hq.v3.building.yaml")

        result = assembler.assemble(_spec(context))

        assert {h.identifier for h in result.sites} == {"generate_hq.v2_site", "generate_hq.v3_site"}
        assert graph.get("generate_hq.v2_site").outputs[0] == str(context.maps_root / "hq.v2.world")
        assert graph.get("generate_hq.v3_site").outputs[0] == str(context.maps_root / "hq.v3.world")

    def test_site_output_equal_to_input_rejected(self, tmp_path: Path):
        src = tmp_path / "src"
        context = BuildContext.create(
            source_dir=src, binary_dir=tmp_path / "build", maps_root=src / "maps"
        )
        graph = InMemoryBuildGraph()
        registrar = ActionRegistrar(graph, SiteGenSettings(site_suffix=".world"))
        assembler = PackageAssembler(context, registrar)
        _touch(src / "maps" / "x.world")

        with pytest.raises(InvalidArgument) as exc_info:
            assembler.assemble(_spec(context))
        assert exc_info.value.parameter == "OUTPUT_WORLD"
        assert len(graph) == 0

    def test_collision_with_earlier_registration(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        _touch(context.source_dir / "maps" / "x.building.yaml")
        _touch(context.source_dir / "maps" / "y.building.yaml")
        assembler.assemble(_spec(context, name="first"))
        assert len(graph) == 3

        with pytest.raises(DuplicateActionIdentifier):
            assembler.assemble(_spec(context, name="second"))
        assert len(graph) == 3

    def test_no_inputs_warns_by_default(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        assembler, graph, context = _assembler(tmp_path)
        (context.source_dir / "maps").mkdir(parents=True)

        with caplog.at_level(logging.WARNING, logger="rmf_site_gen"):
            result = assembler.assemble(_spec(context))

        assert result.sites == []
        assert result.package.identifier == "generate_campus_package"
        assert graph.get("generate_campus_package").inputs == ()
        assert any("no '*.building.yaml' files" in r.getMessage() for r in caplog.records)

    def test_no_inputs_strict(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path, SiteGenSettings(strict_discovery=True))
        (context.source_dir / "maps").mkdir(parents=True)

        with pytest.raises(NoInputsFound) as exc_info:
            assembler.assemble(_spec(context))
        assert exc_info.value.input_root == context.source_dir / "maps"
        assert len(graph) == 0

    def test_unwritable_package_dir(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        _touch(context.source_dir / "maps" / "x.building.yaml")
        blocker = _touch(context.binary_dir / "pkg", "")

        with pytest.raises(DirectoryCreateFailed) as exc_info:
            assembler.assemble(_spec(context))
        assert exc_info.value.path == blocker / "worlds"
        assert len(graph) == 0

    def test_reconfiguration_yields_identical_actions(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        for name in ("x", "y", "z"):
            _touch(context.source_dir / "maps" / name / f"{name}.building.yaml")
        assembler.assemble(_spec(context))

        again, graph_again, _ = _assembler(tmp_path)
        again.assemble(_spec(context))

        assert graph.actions == graph_again.actions

    def test_single_file_input(self, tmp_path: Path):
        assembler, graph, context = _assembler(tmp_path)
        site = _touch(context.source_dir / "lobby.building.yaml")

        result = assembler.assemble(_spec(context, input_root=site))
        assert [h.identifier for h in result.sites] == ["generate_lobby_site"]
