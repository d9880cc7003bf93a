"""Defines the command-line interface for the ipv4check application.

This module uses the `click` library to create the CLI and `rich` to render
its output. It is the presenter around the validator: it reads candidate
addresses from the user, a file or the command line, asks the core for a
verdict, and formats the result. It never decides validity itself.
"""
import html
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

import click
from halo import Halo
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.config import Config, OUTPUT_FORMATS
from .core.validator import check_address, check_addresses
from .utils.sources import read_addresses

# Configure rich consoles; user input is escaped before it is printed.
console = Console(emoji=False, highlight=False)
err_console = Console(stderr=True, emoji=False, highlight=False)

logger = logging.getLogger(__name__)

SESSION_TITLE = "IP Address Validator"
ADDRESS_PROMPT = "Enter an IP address to validate: "
AGAIN_PROMPT = "Do you want to validate another IP address? (y/n): "
FAREWELL = "Thank you for using the IP Address Validator!"

FORMAT_HINTS = (
    "Note: Valid IPv4 format is xxx.xxx.xxx.xxx where each xxx is 0-255",
    "      Examples: 192.168.1.1, 10.0.0.1, 255.255.255.0",
    "      Invalid examples: 256.1.1.1, 192.168.01.1, 192.168.1",
)


class AliasedGroup(click.Group):
    """A custom click Group that supports command aliases and case-insensitivity."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._aliases: Dict[str, str] = {}

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        """Gets a command by name, checking for aliases and prefixes.

        Args:
            ctx: The click context.
            cmd_name: The command name entered by the user.

        Returns:
            The matched click command, or None.
        """
        cmd_name = cmd_name.lower()
        # Exact match
        rv = super().get_command(ctx, cmd_name)
        if rv is not None:
            return rv
        # Alias match
        if cmd_name in self._aliases:
            return super().get_command(ctx, self._aliases[cmd_name])
        # Prefix match
        matches = [x for x in self.list_commands(ctx) if x.startswith(cmd_name)]
        if not matches:
            return None
        if len(matches) == 1:
            return super().get_command(ctx, matches[0])
        ctx.fail(f"Ambiguous command: '{cmd_name}'. Matches: {', '.join(sorted(matches))}")
        return None

    def add_alias(self, alias: str, command_name: str) -> None:
        """Adds an alias for a command.

        Args:
            alias: The alias to add.
            command_name: The name of the command to alias.
        """
        self._aliases[alias.lower()] = command_name.lower()


def _load_config(config_path: Optional[str]) -> Config:
    config_obj = Config(config_path=config_path)
    console.no_color = not config_obj.get("colors", True)
    return config_obj


@click.group(cls=AliasedGroup, invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="ipv4check")
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """A strict validator for dotted-decimal IPv4 addresses.

    An address is valid when it has exactly four octets separated by three
    dots, each octet a number from 0 to 255 written without leading zeros.
    Run without a command to start an interactive session.
    """
    log_level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    logger.debug("Debug mode enabled.")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose or debug

    if ctx.invoked_subcommand is None:
        ctx.invoke(interactive)


def _read_line(prompt: str) -> Optional[str]:
    """Reads one line from the user, or None if the read failed."""
    try:
        return console.input(prompt)
    except (EOFError, OSError) as e:
        logger.debug(f"Reading input failed: {e!r}")
        return None


def _wants_another(answer: Optional[str]) -> bool:
    """Returns True only for a "y" answer, in either case."""
    return answer is not None and answer.strip().lower() == "y"


def _present_verdict(report: Dict[str, Any], config: Config, show_reasons: bool) -> None:
    """Prints the verdict for one address in the interactive session.

    Args:
        report: The address report from `check_address`.
        config: The application's configuration object.
        show_reasons: Whether to print why an address was rejected.
    """
    address = escape(report["address"])
    if report["valid"]:
        console.print(f"Result: '{address}' is [green]VALID[/green]", soft_wrap=True)
        return

    console.print(f"Result: '{address}' is [red]INVALID[/red]", soft_wrap=True)
    if show_reasons:
        for error in report["errors"]:
            console.print(f"[yellow]Reason: {escape(error)}[/yellow]", soft_wrap=True)
        for warning in report["warnings"]:
            console.print(f"[yellow]Warning: {escape(warning)}[/yellow]", soft_wrap=True)
    if config.get("show_hints", True):
        for line in FORMAT_HINTS:
            console.print(line)


def _run_session(config: Config, show_reasons: bool) -> None:
    """Runs the prompt / validate / ask-again loop until the user stops.

    Args:
        config: The application's configuration object.
        show_reasons: Whether to print why an address was rejected.
    """
    if config.get("interactive.header", True):
        console.print(SESSION_TITLE)
        console.print("=" * len(SESSION_TITLE))
        console.print()

    while True:
        candidate = _read_line(ADDRESS_PROMPT)
        if candidate is None:
            console.print()
            console.print("[red]Error reading input.[/red]")
        else:
            _present_verdict(check_address(candidate, config), config, show_reasons)

        if not config.get("interactive.prompt_again", True):
            break

        console.print()
        answer = _read_line(AGAIN_PROMPT)
        console.print()
        if not _wants_another(answer):
            break

    console.print(FAREWELL)


@main.command()
@click.option("--explain", is_flag=True, help="Show why rejected addresses are invalid.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a custom config file.")
@click.pass_context
def interactive(ctx: click.Context, explain: bool, config_path: Optional[str]) -> None:
    """Validate addresses one at a time in an interactive session.

    Each address is read from a prompt and reported as VALID or INVALID.
    After each one you are asked whether to validate another; answer "y" to
    continue, anything else to stop.
    """
    config_obj = _load_config(config_path)
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    show_reasons = explain or verbose or bool(config_obj.get("verbose", False))
    try:
        _run_session(config_obj, show_reasons)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(1)


def _collect_candidates(addresses: Tuple[str, ...], file_path: Optional[str], show_spinner: bool) -> List[str]:
    """Gathers candidates from the command line and an optional file.

    Args:
        addresses: Addresses given as arguments.
        file_path: A file with one address per line, or "-" for stdin.
        show_spinner: Whether to show a progress spinner while reading.

    Returns:
        All candidates, arguments first.
    """
    candidates = list(addresses)
    if not file_path:
        return candidates

    source = "standard input" if file_path == "-" else file_path
    with Halo(text=f"Reading addresses from {source}...", spinner="dots", enabled=show_spinner) as spinner:
        try:
            from_file = list(read_addresses(file_path))
        except OSError as e:
            spinner.fail(f"Could not read {source}: {e}")
            err_console.print(f"[red]Could not read {escape(source)}: {escape(str(e))}[/red]")
            sys.exit(1)
        spinner.succeed(f"Read {len(from_file)} address(es) from {source}")
    candidates.extend(from_file)
    return candidates


def _format_results_as_json(all_results: List[Dict]) -> str:
    return json.dumps(all_results, indent=2)


def _format_results_as_markdown(all_results: List[Dict]) -> str:
    """Formats a list of address reports into a Markdown table.

    Args:
        all_results: A list of address reports from the validation pipeline.

    Returns:
        A Markdown-formatted string representing the results.
    """
    markdown = "# IPv4 Validation Results\n\n"
    markdown += "| Address | Verdict | Reason |\n|---|---|---|\n"
    for results in all_results:
        address = results.get("address", "").replace("|", "\\|")
        verdict = "VALID" if results.get("valid") else "INVALID"
        errors = "; ".join(results.get("errors", [])).replace("|", "\\|")
        markdown += f"| `{address}` | {verdict} | {errors} |\n"
    return markdown


def _format_results_as_html(all_results: List[Dict]) -> str:
    """Formats a list of address reports into an HTML string.

    Args:
        all_results: A list of address reports from the validation pipeline.

    Returns:
        An HTML-formatted string representing the results.
    """
    page = "<html><head><title>ipv4check Results</title></head><body>"
    page += "<h1>IPv4 Validation Results</h1><table>"
    page += "<tr><th>Address</th><th>Verdict</th><th>Reason</th></tr>"
    for results in all_results:
        address = html.escape(results.get("address", ""))
        verdict = "VALID" if results.get("valid") else "INVALID"
        errors = html.escape("; ".join(results.get("errors", [])))
        page += f"<tr><td><code>{address}</code></td><td>{verdict}</td><td>{errors}</td></tr>"
    page += "</table></body></html>"
    return page


def _display_results(all_results: List[Dict], explain: bool = False) -> None:
    """Displays address reports in formatted tables.

    Args:
        all_results: A list of address reports from the validation pipeline.
        explain: Whether to show the per-gate results for each address.
    """
    table = Table(title="IPv4 Validation Results")
    table.add_column("Address", style="cyan")
    table.add_column("Verdict")
    table.add_column("Reason")
    for results in all_results:
        verdict = "[green]VALID[/green]" if results.get("valid") else "[red]INVALID[/red]"
        reason = "; ".join(results.get("errors", []))
        table.add_row(escape(results.get("address", "")), verdict, escape(reason))
    console.print(table)

    if explain:
        for results in all_results:
            gate_table = Table(title=f"Gates for {escape(results.get('address', ''))}")
            gate_table.add_column("Gate", style="cyan")
            gate_table.add_column("Status")
            gate_table.add_column("Details")
            for res in results.get("validator_results", []):
                status = "[red]Failed[/red]" if res.get("errors") else "[green]Passed[/green]"
                details = "; ".join(res.get("errors", []) + res.get("warnings", []))
                gate_table.add_row(res["name"], status, escape(details))
            console.print(gate_table)

    invalid = sum(1 for r in all_results if not r.get("valid"))
    if invalid:
        console.print(Panel(f"{invalid} of {len(all_results)} address(es) are invalid.", style="red", title="Check Complete"))
    else:
        console.print(Panel(f"All {len(all_results)} address(es) are valid.", style="green", title="Check Complete"))


@main.command()
@click.argument("addresses", nargs=-1, required=False)
@click.option("--file", "-f", "file_path", type=click.Path(exists=True, dir_okay=False, allow_dash=True), help="Read addresses from a file, one per line ('-' for stdin).")
@click.option("--json", "json_output", is_flag=True, help="Output results in JSON format.")
@click.option("--md", "md_output", is_flag=True, help="Output results in Markdown format.")
@click.option("--html", "html_output", is_flag=True, help="Output results in HTML format.")
@click.option("--explain", is_flag=True, help="Show the result of every gate.")
@click.option("--quiet", "-q", is_flag=True, help="Print nothing; only set the exit code.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a custom config file.")
def check(addresses: Tuple[str, ...], file_path: Optional[str], json_output: bool, md_output: bool, html_output: bool, explain: bool, quiet: bool, config_path: Optional[str]) -> None:
    """Validate one or more addresses without prompting.

    Addresses can be given as arguments, read from a file with --file, or
    both. The command exits with status 0 when every address is valid and
    1 when at least one is invalid.
    """
    config_obj = _load_config(config_path)

    if sum((json_output, md_output, html_output)) > 1:
        raise click.UsageError("Use only one of --json, --md and --html.")
    if json_output:
        output = "json"
    elif md_output:
        output = "md"
    elif html_output:
        output = "html"
    else:
        output = config_obj.output_format()

    candidates = _collect_candidates(addresses, file_path, show_spinner=output == "text" and not quiet and sys.stdout.isatty())
    if not candidates:
        raise click.UsageError("No addresses given. Pass them as arguments or use --file.")

    all_results = check_addresses(candidates, config_obj)
    logger.info(f"Checked {len(all_results)} address(es)")

    if quiet:
        pass
    elif output == "json":
        click.echo(_format_results_as_json(all_results))
    elif output == "md":
        click.echo(_format_results_as_markdown(all_results))
    elif output == "html":
        click.echo(_format_results_as_html(all_results))
    else:
        _display_results(all_results, explain=explain)

    if any(not r.get("valid") for r in all_results):
        sys.exit(1)


@main.command()
@click.argument("action", type=click.Choice(['get', 'set', 'list', 'reset']), required=True)
@click.argument("key", type=str, required=False)
@click.argument("value", type=str, required=False)
def config(action: str, key: Optional[str], value: Optional[str]) -> None:
    """Manage the ipv4check configuration.

    This command allows you to view, set, and reset configuration values
    that are stored in the user-level configuration file.

    \b
    ACTION:
        get <key>       Get a configuration value.
        set <key> <value> Set a configuration value.
        list            List all current configuration values.
        reset           Reset the configuration to its default state.
    """
    config_obj = Config()
    if action == "list":
        console.print(Panel(escape(json.dumps(config_obj.config, indent=2)), title="Current Configuration"))
    elif action == "get":
        if not key:
            err_console.print("[red]Error: 'get' action requires a key.[/red]")
            sys.exit(1)
        click.echo(config_obj.get(key))
    elif action == "set":
        if not key or value is None:
            err_console.print("[red]Error: 'set' action requires a key and a value.[/red]")
            sys.exit(1)
        if key == "output" and value.lower() not in OUTPUT_FORMATS:
            err_console.print(f"[red]Error: output must be one of {', '.join(OUTPUT_FORMATS)}.[/red]")
            sys.exit(1)
        parent = config_obj.conflicting_parent(key)
        if parent:
            err_console.print(f"[red]Error: '{escape(parent)}' holds a value, not a table; cannot set '{escape(key)}'.[/red]")
            sys.exit(1)
        # Type casting for bools and ints
        if value.lower() in ('true', 'false'):
            processed_value: Any = value.lower() == 'true'
        elif value.isdigit():
            processed_value = int(value)
        else:
            processed_value = value
        try:
            config_obj.save_user_setting(key, processed_value)
            console.print(f"[green]'{escape(key)}' set to '{escape(str(processed_value))}' and saved to user config.[/green]")
        except IOError as e:
            err_console.print(f"[red]Error saving configuration: {escape(str(e))}[/red]")
            sys.exit(1)
    elif action == "reset":
        if Config.reset_user_config():
            console.print("[green]Configuration reset to defaults.[/green]")
        else:
            console.print("[yellow]No user configuration file to reset.[/yellow]")


main.add_alias('i', 'interactive')
main.add_alias('c', 'check')

if __name__ == "__main__":
    main()
