"""Main entry point for repocount."""

import argparse
import json
import logging
import os
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .analyzers.cloc import ClocRunner
from .crawler.models import RepoResult, RepoStatus
from .crawler.repo_manager import RepoManager
from .processor import RepositoryProcessor
from .store.output import OutputGenerator, summarize

console = Console()
err_console = Console(stderr=True)

DEFAULT_CONFIG_PATH = "config/config.yaml"
DEFAULT_LIST_FILE = "repolist.txt"
TOKEN_ENV_VAR = "REPOCOUNT_TOKEN"


def load_config(config_path: Path, required: bool = False) -> dict:
    """Load configuration from YAML file.

    A missing file yields an empty config unless ``required`` is set.
    """
    if not config_path.exists():
        if required:
            err_console.print(f"[red]Error:[/red] Config file not found: {escape(str(config_path))}")
            raise SystemExit(1)
        return {}

    config = yaml.safe_load(config_path.read_text()) or {}
    if not isinstance(config, dict):
        err_console.print(f"[red]Error:[/red] Config file must contain a mapping: {escape(str(config_path))}")
        raise SystemExit(1)

    return config


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def build_processor(config: dict) -> RepositoryProcessor:
    """Create the processor from the merged configuration."""
    clone_config = config.get("clone") or {}
    cloc_config = config.get("cloc") or {}

    manager = RepoManager(
        base_path=clone_config.get("base_path", "./repositories"),
        token=config.get("token") or os.environ.get(TOKEN_ENV_VAR),
        depth=clone_config.get("depth", 0),
        timeout=clone_config.get("timeout"),
        git_executable=clone_config.get("git", "git"),
    )
    counter = ClocRunner(
        executable=cloc_config.get("command", "cloc"),
        extra_args=cloc_config.get("args"),
        timeout=cloc_config.get("timeout"),
    )

    return RepositoryProcessor(
        repo_manager=manager,
        counter=counter,
        on_start=lambda url: console.print(f"Processing repository: {escape(url)}", highlight=False, soft_wrap=True),
    )


def report_result(result: RepoResult) -> None:
    """Print the outcome of one repository."""
    if result.status == RepoStatus.COUNTED:
        figures = json.dumps(result.summary.to_dict())
        console.print(
            f"Total figures for repo {escape(result.repo.name)} under user "
            f"{escape(result.repo.owner)} is: {figures}",
            highlight=False,
            soft_wrap=True,
        )
    elif result.status == RepoStatus.EMPTY:
        console.print("No figures found")
    else:
        err_console.print(f"[red]Error during {result.step}:[/red] {escape(result.error)}", soft_wrap=True)


def print_summary(results: list[RepoResult]) -> None:
    """Print a table of the whole run."""
    if not results:
        console.print("[yellow]No repositories listed[/yellow]")
        return

    table = Table(title="Line counts")
    table.add_column("Repository")
    table.add_column("Status")
    for name in ("Files", "Blank", "Comment", "Code"):
        table.add_column(name, justify="right")

    for result in results:
        name = escape(result.repo.full_path if result.repo else result.url)
        if result.summary:
            s = result.summary
            table.add_row(name, "[green]counted[/green]", str(s.files), str(s.blank), str(s.comment), str(s.code))
        elif result.status == RepoStatus.EMPTY:
            table.add_row(name, "[yellow]no figures[/yellow]", "-", "-", "-", "-")
        else:
            table.add_row(name, f"[red]failed ({result.step})[/red]", "-", "-", "-", "-")

    console.print(table)

    summary = summarize(results)
    console.print(
        f"\n[bold]Counted {summary['counted']}/{summary['repositories_processed']} repositories[/bold]"
        f" ({summary['empty']} without figures, {summary['failed']} failed)"
    )


def run(config: dict) -> list[RepoResult]:
    """Process every repository in the configured list."""
    processor = build_processor(config)
    list_file = config.get("list_file", DEFAULT_LIST_FILE)

    results = []
    for result in processor.process(list_file):
        report_result(result)
        results.append(result)

    return results


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Clone every repository in a list and count its lines of code with cloc"
    )
    parser.add_argument(
        "list_file",
        nargs="?",
        help=f"File with one repository URL per line (default: {DEFAULT_LIST_FILE})",
    )
    parser.add_argument(
        "--config", "-c",
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--base-path",
        help="Directory to clone repositories into (default: ./repositories)",
    )
    parser.add_argument(
        "--token",
        help=f"Access token spliced into https:// clone URLs (or set {TOKEN_ENV_VAR})",
    )
    parser.add_argument(
        "--depth",
        type=int,
        help="Shallow clone depth (0 clones full history)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for each git clone before giving up",
    )
    parser.add_argument(
        "--output", "-o",
        help="Directory to write results.json and results.md into",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.config:
        config = load_config(Path(args.config), required=True)
    else:
        config = load_config(Path(DEFAULT_CONFIG_PATH))

    # Override config from CLI
    if args.list_file:
        config["list_file"] = args.list_file
    if args.token:
        config["token"] = args.token
    clone_config = config["clone"] = config.get("clone") or {}
    if args.base_path:
        clone_config["base_path"] = args.base_path
    if args.depth is not None:
        clone_config["depth"] = args.depth
    if args.timeout is not None:
        clone_config["timeout"] = args.timeout
    if args.output:
        config["output"] = {**(config.get("output") or {}), "base_path": args.output}

    try:
        results = run(config)
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Error:[/red] Could not read repository list: {escape(str(e))}")
        return 1

    print_summary(results)

    output_dir = (config.get("output") or {}).get("base_path")
    if output_dir:
        OutputGenerator(results, output_dir=output_dir).generate_all()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
