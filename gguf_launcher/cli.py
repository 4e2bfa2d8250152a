"""
Command line entry point.

Usage:
    gguf-launcher start
    gguf-launcher start --model llama-2-7b-chat.Q5_K_M.gguf --prompt-template llama-2-chat
    gguf-launcher --models-dir ~/models start
    gguf-launcher stop
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .chooser import Chooser, TerminalChooser
from .config import config
from .errors import DownloadFailed, LauncherError
from .resolver import ModelResolver, ResolvedSelection
from .templates import TEMPLATE_IDS, parse_cli

logger = logging.getLogger(__name__)

# Options that only make sense together with --model
MODEL_DEPENDENT_OPTIONS = (
    ("prompt_template", "--prompt-template"),
    ("reverse_prompt", "--reverse-prompt"),
    ("context_size", "--context-size"),
)


@dataclass(frozen=True)
class StartOptions:
    """Launch options passed through to the backend alongside the selection."""

    reverse_prompt: Optional[str] = None
    context_size: Optional[int] = None


def positive_int(value: str) -> int:
    """argparse ``type=`` hook for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the launcher."""
    parser = argparse.ArgumentParser(
        prog="gguf-launcher",
        description="Resolve a GGUF model and prompt template for a local LLM backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Prompt templates:
  {", ".join(TEMPLATE_IDS)}
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--models-dir",
        "-d",
        type=str,
        default=None,
        help=f"Directory holding cached models (default: {config.MODELS_DIR})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed technical logs for debugging",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    start = subparsers.add_parser("start", help="Resolve a model and template, then launch")
    start.add_argument(
        "--model", "-m", type=str, default=None, help="Model file to launch"
    )
    start.add_argument(
        "--prompt-template",
        "-p",
        type=parse_cli,
        default=None,
        metavar="TEMPLATE",
        help="Type of prompt template for the gguf model (requires --model)",
    )
    start.add_argument(
        "--reverse-prompt",
        "-r",
        type=str,
        default=None,
        help="Halt generation at PROMPT, return control (requires --model)",
    )
    start.add_argument(
        "--context-size",
        "-c",
        type=positive_int,
        default=None,
        help="Prompt context size (requires --model)",
    )

    subparsers.add_parser("stop", help="Stop the running backend (not yet supported)")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse arguments and enforce options that depend on --model."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "start" and not args.model:
        given = [flag for attr, flag in MODEL_DEPENDENT_OPTIONS if getattr(args, attr) is not None]
        if given:
            parser.error(f"{', '.join(given)} requires --model")

    return args


def setup_logging(verbose: bool = False):
    """Configure root logging with a Rich handler."""
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_time=False, show_path=False)],
    )


def print_selection(console: Console, selection: ResolvedSelection, options: StartOptions):
    """Show the resolved launch parameters."""
    table = Table(show_header=False, box=None)
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Model", Text(selection.model_path))
    table.add_row("Prompt template", str(selection.template))
    if options.reverse_prompt is not None:
        table.add_row("Reverse prompt", Text(options.reverse_prompt))
    if options.context_size is not None:
        table.add_row("Context size", str(options.context_size))

    console.print(
        Panel(table, title="[bold green]Ready to launch[/bold green]", border_style="green")
    )


def command_start(
    args: argparse.Namespace, chooser: Chooser, console: Console
) -> ResolvedSelection:
    """
    Resolve the model and prompt template for ``start``.

    Raises:
        LauncherError: If any resolution stage fails
    """
    models_dir = args.models_dir or config.MODELS_DIR
    resolver = ModelResolver(
        chooser,
        directory=models_dir,
        download_timeout=config.DOWNLOAD_TIMEOUT,
        chunk_size=config.DOWNLOAD_CHUNK_SIZE,
        show_progress=config.SHOW_PROGRESS,
    )
    selection = resolver.resolve(args.model, args.prompt_template)

    options = StartOptions(reverse_prompt=args.reverse_prompt, context_size=args.context_size)
    print_selection(console, selection, options)

    # Starting the inference backend, Qdrant and the api-server is left to
    # the external launcher
    logger.info("Backend launch is handled by the external launcher")
    return selection


def main(
    argv: Optional[List[str]] = None,
    chooser: Optional[Chooser] = None,
    console: Optional[Console] = None,
) -> int:
    """
    Main entry point for the launcher.

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    setup_logging(args.verbose)
    logger.debug(f"Configuration: {config.summary()}")

    console = console or Console()

    if args.command == "stop":
        console.print("[red]✗ The stop command is not yet supported[/red]")
        return 1

    try:
        command_start(args, chooser or TerminalChooser(console=console), console)

    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Interrupted. Exiting...[/yellow]")
        return 130

    except DownloadFailed as e:
        logger.error(f"Failed to start: {e}")
        console.print(f"\n[red]✗ Error: {escape(str(e))}[/red]")
        console.print(
            "[yellow]⚠ Partially downloaded data may remain as a hidden .part file "
            "in the models directory[/yellow]"
        )
        return 1

    except LauncherError as e:
        logger.error(f"Failed to start: {e}")
        console.print(f"\n[red]✗ Error: {escape(str(e))}[/red]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
