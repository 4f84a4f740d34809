"""CLI commands for stockerbot."""

import asyncio
import platform
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from stockerbot import __version__, __logo__

# Windows needs SelectorEventLoop for python-telegram-bot's polling
if platform.system() == "Windows":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

app = typer.Typer(
    name="stockerbot",
    help=f"{__logo__} stockerbot - Personal stock assistant on Telegram",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} stockerbot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """stockerbot - Personal stock assistant on Telegram."""
    pass


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


# ============================================================================
# Pairing Commands
# ============================================================================


@app.command()
def pair(
    token: str = typer.Option("", "--token", "-t", help="Bot token (skips the prompt)"),
    timeout: float = typer.Option(0, "--timeout", help="Seconds to wait for the code (default from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
):
    """Pair this bot with your Telegram account."""
    from stockerbot.cli.setup import resolve_token, show_pairing_prompt
    from stockerbot.config.loader import load_config, save_config, get_config_path
    from stockerbot.pairing import PairingTimeout, bind_owner, probe_identity, start_pairing

    _configure_logging(verbose)

    console.print(f"\n[bold cyan]{__logo__} Telegram Secure Pairing[/bold cyan]")
    console.print("─" * 40)

    config = load_config()
    bot_token = resolve_token(token, config.telegram.token)
    if not bot_token:
        console.print("[red]No token provided[/red]")
        raise typer.Exit(1)

    wait_seconds = timeout if timeout > 0 else config.pairing.timeout_seconds
    probe_timeout = config.pairing.probe_timeout_seconds

    async def probe(value: str):
        return await probe_identity(value, timeout=probe_timeout)

    try:
        result = asyncio.run(start_pairing(
            bot_token,
            timeout=wait_seconds,
            deep_link_host=config.pairing.deep_link_host,
            probe=probe,
            on_ready=show_pairing_prompt,
        ))
    except PairingTimeout as e:
        console.print(f"[red]✗ {e.message}[/red]")
        console.print("[dim]Run [cyan]stockerbot pair[/cyan] again to start a new session.[/dim]")
        raise typer.Exit(1)
    except Exception as e:
        logger.opt(exception=e).debug("Pairing failed")
        console.print(f"[red]✗ Pairing failed: {e}[/red]")
        raise typer.Exit(1)

    bind_owner(config, result)
    save_config(config)

    who = f"@{result.username}" if result.username else "no username"
    console.print(f"\n[green]✓[/green] Paired! Owner ID: [cyan]{result.owner_id}[/cyan] ({who})")
    if result.degraded:
        console.print("[yellow]Bot identity could not be verified, but the token works.[/yellow]")
    console.print(f"[green]✓[/green] Saved to {get_config_path()}")


# ============================================================================
# Status Commands
# ============================================================================


@app.command()
def status():
    """Show the current owner binding."""
    from stockerbot.config.loader import load_config, get_config_path
    from stockerbot.pairing import get_owner

    config_path = get_config_path()
    console.print(f"{__logo__} stockerbot Status\n")
    console.print(f"Config: {config_path} {'[green]✓[/green]' if config_path.exists() else '[red]✗[/red]'}")

    config = load_config()
    owner = get_owner(config)
    token = config.telegram.token

    table = Table(title="Telegram Pairing")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Bot token", f"{token[:5]}...******" if token else "[dim]not set[/dim]")
    table.add_row("Owner ID", str(owner.owner_id) if owner else "[dim]not paired[/dim]")
    table.add_row("Username", (owner.username or "-") if owner else "-")
    table.add_row("Pairing timeout", f"{config.pairing.timeout_seconds:g}s")

    console.print(table)

    if not owner:
        console.print("\n[yellow]Not paired: the bot will not accept commands from anyone.[/yellow]")
        console.print("Run [cyan]stockerbot pair[/cyan] to bind your Telegram account.")


if __name__ == "__main__":
    app()
