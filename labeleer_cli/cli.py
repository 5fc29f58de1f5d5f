"""CLI orchestration: wires credentials, label file resolution and actions together."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from labeleer_cli.actions import dispatch
from labeleer_cli.config import AppConfig, assemble_project_config, load_config
from labeleer_cli.credentials import resolve_credentials
from labeleer_cli.discovery import find_candidates
from labeleer_cli.errors import LabeleerError, ResolutionCancelled
from labeleer_cli.formats import display_name
from labeleer_cli.gateway import LabeleerClient
from labeleer_cli.label_files import resolve_label_file
from labeleer_cli.project_setup import PROJECT_FILE_NAME, ProjectSetup, inquire_project_setup
from labeleer_cli.terminal import Terminal

console = Console()


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging with rich handler for colored, readable output."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _print_setup_table(setup: ProjectSetup) -> None:
    """Print the locale to path mapping of a project setup."""
    table = Table(title=f"{PROJECT_FILE_NAME} ({display_name(setup.variant)})")
    table.add_column("Locale", style="cyan")
    table.add_column("Path", style="green")

    for entry in setup.paths:
        table.add_row(entry.locale, entry.path)

    console.print()
    console.print(table)


def _run_session(terminal: Terminal, config: AppConfig, project_root: Path) -> None:
    """Resolve the project configuration and hand it to the action loop."""
    logger = logging.getLogger(__name__)

    partial = resolve_credentials(terminal, project_root)

    candidates = find_candidates("label", project_root)
    label_file = resolve_label_file(terminal, candidates, project_root)

    project = assemble_project_config(partial, label_file.path)
    logger.info("Resolved project %s with label file %s", project.project_id, project.local_file_path)

    client = LabeleerClient(project.access_token, api=config.api)
    dispatch(terminal, project, client, is_new=label_file.is_new)


def _run_init(terminal: Terminal, project_root: Path) -> None:
    """Create or show the labeleer.json project setup for the --init flag."""
    setup = inquire_project_setup(terminal, project_root)
    if setup is None:
        terminal.goodbye()
        return
    _print_setup_table(setup)


def run(config_path: str | None = None, verbose: bool = False, init: bool = False) -> None:
    """Main synchronous entry point for the CLI.

    Every outcome ends in SystemExit: 0 for completion or cancellation,
    1 for failures.

    Args:
        config_path: Optional path to a YAML settings file.
        verbose: Log debug output.
        init: Create or show the project setup instead of running a session.
    """
    setup_logging("DEBUG" if verbose else "WARNING")
    logger = logging.getLogger(__name__)
    terminal = Terminal(console)
    project_root = Path.cwd()

    try:
        terminal.header("Labeleer CLI")

        config = load_config(config_path)
        if not verbose:
            logging.getLogger().setLevel(config.log_level)
        logger.info("Using API at %s", config.api.base_url)

        if init:
            _run_init(terminal, project_root)
        else:
            _run_session(terminal, config, project_root)

    except ResolutionCancelled as e:
        terminal.warn(escape(str(e)))
        terminal.goodbye()
        raise SystemExit(0)
    except (KeyboardInterrupt, EOFError):
        console.print()
        terminal.goodbye()
        raise SystemExit(0)
    except LabeleerError as e:
        terminal.error(escape(str(e)))
        raise SystemExit(1)
    except FileNotFoundError as e:
        console.print(f"[red bold]Error:[/red bold] {escape(str(e))}")
        raise SystemExit(1)
    except ValueError as e:
        console.print(f"[red bold]Configuration error:[/red bold] {escape(str(e))}")
        raise SystemExit(1)
    except Exception as e:
        logger.exception("An unexpected error occurred: %s", e)
        raise SystemExit(1)

    raise SystemExit(0)
