"""Command line interface for pylaunch."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .artifact_generator import render_artifacts, write_artifacts
from .config import ConfigError, LaunchConfig, load_config
from .logging import configure_logging
from .models import DeploymentDescriptor, DetectionError
from .reporter import generate_reports, summarize
from .stack_detector import detect_stack

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_PYTHON = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pylaunch",
        description="Detect a Python project's stack and generate deployment artifacts.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    common.add_argument(
        "--config",
        default=None,
        help="Path to optional configuration file (YAML or JSON).",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    detect = subparsers.add_parser(
        "detect",
        parents=[common],
        help="Print the deployment descriptor for a project.",
    )
    detect.add_argument(
        "--json",
        action="store_true",
        help="Print the descriptor as JSON.",
    )

    generate = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Render Dockerfile and related assets for a project.",
    )
    generate.add_argument(
        "--output",
        default=None,
        help="Directory to write generated artifacts (defaults to the project root).",
    )
    generate.add_argument(
        "--force",
        action="store_true",
        help="Overwrite files that already exist.",
    )

    return parser


def _detect(args: argparse.Namespace, config: LaunchConfig) -> Optional[DeploymentDescriptor]:
    descriptor = detect_stack(args.path, resolver=config.version_resolver())
    if descriptor is None:
        print(f"No Python project detected in {args.path}", file=sys.stderr)
    return descriptor


def handle_detect(args: argparse.Namespace, config: LaunchConfig) -> int:
    descriptor = _detect(args, config)
    if descriptor is None:
        return EXIT_NOT_PYTHON
    if args.json:
        print(json.dumps(descriptor.to_dict(), indent=2))
    else:
        print(summarize(descriptor))
    return EXIT_OK


def handle_generate(args: argparse.Namespace, config: LaunchConfig) -> int:
    descriptor = _detect(args, config)
    if descriptor is None:
        return EXIT_NOT_PYTHON

    if args.output:
        output_dir = Path(args.output)
    elif config.output_dir:
        output_dir = config.output_dir
    else:
        output_dir = Path(args.path)
    output_dir = output_dir.expanduser().resolve()
    output_dir.mkdir(parents=True, exist_ok=True)

    artifacts = render_artifacts(descriptor, config.templates_dir)
    written, skipped = write_artifacts(artifacts, output_dir, overwrite=args.force)

    warnings = [f"{path.name} already exists; generation skipped." for path in skipped]
    if descriptor.deploy_docs:
        warnings.append(descriptor.deploy_docs)

    generated_files = [str(path) for path in written]
    reports = generate_reports(
        output_dir=output_dir,
        descriptor=descriptor,
        templates_used=[artifact.template_used for artifact in artifacts],
        generated_files=generated_files,
        warnings=warnings,
    )
    generated_files.extend(str(path) for path in reports.values())

    print(f"{summarize(descriptor)} | Generated: {', '.join(generated_files)}")
    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=bool(args.verbose))

    handlers = {"detect": handle_detect, "generate": handle_generate}
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_OK
    try:
        config = load_config(Path(args.config) if args.config else None)
        return handler(args, config)
    except (DetectionError, ConfigError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
