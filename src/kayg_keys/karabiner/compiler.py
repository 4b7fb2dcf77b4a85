from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from kayg_keys.layers.frontend import LayerFrontend
from kayg_keys.layers.ir import ProfileIR
from kayg_keys.layers.lint import lint_profile
from kayg_keys.profile import primary_profile

from .backend import KarabinerBackend
from .models.complex_modifications import ComplexModifications
from .writer import DEFAULT_KARABINER_JSON, ProfileNotFoundError, render, write_to_profile

logger = logging.getLogger(__name__)


def load_profile(config_path: str | Path | None = None) -> ProfileIR:
    """The built-in profile, or the one described by a TOML config."""

    if config_path is None:
        return primary_profile()
    frontend = LayerFrontend()
    return frontend.parse_config(frontend.load_toml(config_path))


def compile_profile(profile: ProfileIR) -> ComplexModifications:
    return KarabinerBackend().compile(profile)


def compile_toml_config(in_path: str | Path, out_path: str | Path, *, indent: int | None = 2) -> None:
    """End-to-end compilation: TOML file -> complex_modifications JSON file."""

    doc = compile_profile(load_profile(in_path))
    Path(out_path).write_text(render(doc, indent=indent) + "\n", encoding="utf-8")


def _build(args: argparse.Namespace) -> int:
    profile = load_profile(args.config)
    lint_profile(profile)
    doc = compile_profile(profile)

    if args.dry_run:
        sys.stdout.write(render(doc, indent=args.indent) + "\n")
        return 0
    if args.out:
        Path(args.out).write_text(render(doc, indent=args.indent) + "\n", encoding="utf-8")
        logger.info("wrote %d rules to %s", len(doc.rules), args.out)
        return 0

    write_to_profile(
        args.profile or profile.name,
        doc,
        args.karabiner_json,
        indent=args.indent,
    )
    return 0


def _check(args: argparse.Namespace) -> int:
    issues = lint_profile(load_profile(args.config))
    if issues:
        return 1
    logger.info("no issues found")
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kayg-keys",
        description="Compile keyboard layers into a Karabiner-Elements profile.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build", help="Compile and write the profile")
    build_parser.add_argument(
        "--config", type=Path, help="Profile config toml (default: built-in kayg-primary)"
    )
    build_parser.add_argument("--profile", help="Target profile name (default: config name)")
    build_parser.add_argument(
        "--karabiner-json",
        type=Path,
        default=DEFAULT_KARABINER_JSON,
        help=f"karabiner.json to update (default: {DEFAULT_KARABINER_JSON})",
    )
    build_parser.add_argument("--out", type=Path, help="Write the document here instead")
    build_parser.add_argument(
        "--dry-run", action="store_true", help="Print the document instead of writing it"
    )
    build_parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    build_parser.set_defaults(func=_build)

    check_parser = subparsers.add_parser("check", help="Lint the profile declarations")
    check_parser.add_argument(
        "--config", type=Path, help="Profile config toml (default: built-in kayg-primary)"
    )
    check_parser.set_defaults(func=_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (OSError, ProfileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
