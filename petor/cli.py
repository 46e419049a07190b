"""petor command-line entry point.

Usage::

    petor https://github.com/acme/starter.git     # interactive, remote template
    petor --template backend                      # interactive, bundled template
    petor --generate backend my-tool              # verbatim copy, no prompts
    petor --list
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from petor import __version__
from petor.config import PetorConfig
from petor.errors import PetorError, UsageError
from petor.scaffolder.materializer import MaterializeResult, Materializer
from petor.utils import (
    console,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``petor``."""
    parser = argparse.ArgumentParser(
        prog="petor",
        description="petor -- create projects from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  petor https://github.com/acme/starter.git\n"
            "  petor --template backend -o ./projects\n"
            "  petor --generate backend restapi   "
            "(generate the `backend` template as `restapi`)\n"
            "  petor --list\n"
        ),
    )
    parser.add_argument(
        "source",
        nargs="*",
        help="Git URL of a remote template (with --generate: the project name)",
    )
    parser.add_argument(
        "--generate",
        nargs="?",
        const="",
        default=None,
        metavar="TEMPLATE",
        help="Copy a bundled template verbatim, without prompts",
    )
    parser.add_argument(
        "--template",
        default=None,
        metavar="NAME",
        help="Configure a bundled template interactively",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Show the list of available templates",
    )
    parser.add_argument(
        "--get-template-dir",
        action="store_true",
        help="Print the templates directory",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory the project is created in (default: current directory)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run(args: argparse.Namespace, config: PetorConfig, parser: argparse.ArgumentParser) -> None:
    """Dispatch to the mode selected by *args*.

    Raises:
        PetorError: On any fatal condition; the caller maps it to an exit code.
    """
    generate = args.generate is not None
    modes = [generate, bool(args.template), bool(args.source) and not generate, args.list]
    if sum(modes) > 1:
        raise UsageError("Only one option can be used at a time")

    materializer = Materializer(config)

    if generate:
        if not args.generate:
            parser.print_help()
            console.print()
            raise UsageError("Missing required arguments for --generate: <template> <project-name>")
        if len(args.source) > 1:
            raise UsageError("--generate takes a template and at most one project name")
        project_name = args.source[0] if args.source else None
        destination = await materializer.generate(args.generate, project_name)
        print_success(f"[Generated] {args.generate} has been generated at {destination}")
    elif args.template:
        result = await materializer.materialize_local(args.template)
        _report(result)
    elif args.source:
        if len(args.source) > 1:
            raise UsageError("Expected a single template repository")
        result = await materializer.materialize_remote(args.source[0])
        _report(result)
    elif args.list:
        names = materializer.list_templates()
        if not names:
            print_warning(f"No templates found in {config.templates_dir}")
            return
        print_info("List of templates:\n")
        for index, name in enumerate(names):
            print_info(f"{index}) {name}")
    elif args.get_template_dir:
        print_info(f"Template directory: {config.templates_dir.resolve()}")
    else:
        parser.print_help()


def _report(result: MaterializeResult) -> None:
    print_summary_table(result.summary(), title="Project created")
    print_success(f"{result.destination.name} has been generated!")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``petor`` and ``python -m petor``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = PetorConfig.from_env()
    if args.output:
        config = config.model_copy(update={"output_dir": Path(args.output)})

    try:
        asyncio.run(run(args, config, parser))
    except PetorError as exc:
        print_error(f"Error: {exc.message}")
        stderr = getattr(exc, "stderr", "")
        if stderr:
            console.print(stderr, markup=False, highlight=False)
        sys.exit(exc.exit_code)
    except (KeyboardInterrupt, EOFError):
        print_error("Aborted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
