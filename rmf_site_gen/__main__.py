from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from rmf_site_gen.api.facade import SiteGen
from rmf_site_gen.config import BuildContext, load_settings
from rmf_site_gen.errors import SiteGenError

logger = logging.getLogger("rmf_site_gen")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m rmf_site_gen",
        description="Configure world and nav-graph generation for RMF site files.",
    )
    parser.add_argument("--source-dir", default=None, help="Root for relative inputs (default: cwd).")
    parser.add_argument("--binary-dir", default=None, help="Root for relative outputs (default: source dir).")
    parser.add_argument("--maps-root", default=None, help="Per-site output root (default: <binary-dir>/maps).")
    parser.add_argument("--ninja", default="build.ninja", help="Ninja file to write (relative to --binary-dir).")
    parser.add_argument("--tool", default=None, help="Conversion executable (default: rmf_site_editor).")
    parser.add_argument("--strict", action="store_true", help="Fail when package discovery finds nothing.")
    parser.add_argument("--depends", action="append", default=[], metavar="PATH_OR_TARGET",
                        help="Extra dependency (may be repeated).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    site = sub.add_parser("site", help="Generate a single site.")
    site.add_argument("input", help="Site description file.")
    site.add_argument("--output-world", required=True)
    site.add_argument("--output-nav-dir", required=True)

    package = sub.add_parser("package", help="Generate every site under a directory.")
    package.add_argument("input", help="Directory searched recursively for site files.")
    package.add_argument("--output-package-dir", required=True)
    package.add_argument("--package-name", required=True)

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    context = BuildContext.create(args.source_dir, args.binary_dir, args.maps_root)

    try:
        settings = load_settings(context.source_dir)
    except ValidationError as exc:
        print(f"Error: invalid settings: {exc}", file=sys.stderr)
        return 2

    updates: dict[str, object] = {}
    if args.tool:
        updates["tool"] = args.tool
    if args.strict:
        updates["strict_discovery"] = True
    if args.verbose:
        updates["log_level"] = "DEBUG"
    settings = settings.model_copy(update=updates)

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    gen = SiteGen(context=context, settings=settings)
    try:
        if args.command == "site":
            handle = gen.rmf_site_generate(
                INPUT=args.input,
                OUTPUT_WORLD=args.output_world,
                OUTPUT_NAV_DIR=args.output_nav_dir,
                DEPENDS=args.depends,
            )
            print(f"Registered {handle.identifier}")
        else:
            result = gen.rmf_site_generate_map_package(
                INPUT=args.input,
                OUTPUT_PACKAGE_DIR=args.output_package_dir,
                PACKAGE_NAME=args.package_name,
                DEPENDS=args.depends,
            )
            for handle in result.sites:
                print(f"Registered {handle.identifier}")
            print(f"Registered {result.package.identifier} ({len(result.sites)} sites)")
        ninja_path = gen.write_ninja(context.binary_path(Path(args.ninja)))
    except SiteGenError as exc:
        logger.error("%s", exc)
        return 1

    print(f"Wrote {ninja_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
