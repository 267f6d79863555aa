"""CLI entrypoints for docplan commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .constants import PLAN_ORDERS
from .logging import configure_logging
from .orchestrator import Orchestrator
from .planning import PlanningError
from .registry import WorkspaceError
from .serialization import overview_to_text


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write timestamped log records to this file.",
    )


def _add_workspace_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the workspace root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Configuration file to use instead of <path>/.docplan.yml.",
    )
    parser.add_argument(
        "--workspace",
        default=None,
        help="Workspace file describing compartments and components.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docplan",
        description="Plan API documentation builds for development components.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser(
        "plan",
        help="Compute build descriptors and the overview, then write plan.json.",
    )
    _add_verbose_option(plan_parser, suppress_default=True)
    _add_log_file_option(plan_parser, suppress_default=True)
    _add_workspace_options(plan_parser)
    plan_parser.add_argument(
        "--output",
        default=None,
        help="Where to write the plan (defaults to output.plan_file from the configuration).",
    )
    plan_parser.add_argument(
        "--order",
        choices=PLAN_ORDERS,
        default=None,
        help="Generation order of the build-all list.",
    )
    plan_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute the plan without writing it.",
    )

    overview_parser = subparsers.add_parser(
        "overview",
        help="Print the compartment overview of documented components.",
    )
    _add_verbose_option(overview_parser, suppress_default=True)
    _add_log_file_option(overview_parser, suppress_default=True)
    _add_workspace_options(overview_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docplan commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    orchestrator = Orchestrator()

    if args.command == "plan":
        dry_run = bool(getattr(args, "dry_run", False))
        try:
            outcome = orchestrator.run_plan(
                args.path,
                config_path=args.config,
                workspace_path=args.workspace,
                output=args.output,
                order=args.order,
                dry_run=dry_run,
            )
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, WorkspaceError, PlanningError) as exc:
            parser.exit(1, f"docplan plan failed: {exc}\nRun with --verbose for more details.\n")
        plan = outcome.plan
        summary = (
            f"{len(plan.descriptors)} components in "
            f"{len(plan.overview.compartments)} compartments"
        )
        if outcome.path is None:
            print(f"Planned {summary} (dry-run)")
        else:
            print(f"Planned {summary}; plan written to {_relativize(outcome.path)}")
        if plan.stale_links:
            print(f"{len(plan.stale_links)} offline links may not resolve; see log for details")
    elif args.command == "overview":
        try:
            plan = orchestrator.build_plan(
                args.path,
                config_path=args.config,
                workspace_path=args.workspace,
            )
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, WorkspaceError, PlanningError) as exc:
            parser.exit(1, f"docplan overview failed: {exc}\n")
        sys.stdout.write(overview_to_text(plan.overview))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
