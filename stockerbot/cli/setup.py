"""Interactive prompts for the pairing wizard."""

from rich.console import Console
from rich.prompt import Confirm, Prompt

from stockerbot.pairing.types import PairingPrompt

console = Console()

MIN_TOKEN_LENGTH = 21
MAX_TOKEN_ATTEMPTS = 3


def prompt_for_token() -> str:
    """
    Ask for a bot token until it looks plausible.

    Returns an empty string if the user gives up.
    """
    console.print("\n[dim]To create a Telegram bot:[/dim]")
    console.print("  1. Open Telegram and search for [cyan]@BotFather[/cyan]")
    console.print("  2. Send [cyan]/newbot[/cyan] and follow the prompts")
    console.print("  3. Copy the token (looks like [dim]123456:ABC-xyz...[/dim])")
    console.print()

    for _ in range(MAX_TOKEN_ATTEMPTS):
        token = Prompt.ask("Enter bot token", password=True).strip()
        if not token:
            return ""
        if len(token) >= MIN_TOKEN_LENGTH:
            return token
        console.print("[red]Token length looks wrong, please try again[/red]")

    return ""


def resolve_token(cli_token: str | None, saved_token: str | None) -> str:
    """
    Pick the token for a new session.

    An explicit token wins and skips prompting. A saved token is offered
    for re-use; otherwise the user is prompted.
    """
    if cli_token and cli_token.strip():
        return cli_token.strip()

    if saved_token:
        console.print(f"[green]✓[/green] Found saved bot token ({saved_token[:5]}...)")
        if Confirm.ask("Re-use saved token?", default=True):
            return saved_token

    return prompt_for_token()


def show_pairing_prompt(prompt: PairingPrompt) -> None:
    """Print the code and deep link the owner needs."""
    bot = prompt.bot
    if bot.probed:
        console.print(f"[green]✓[/green] Token valid! Bot: [cyan]@{bot.username}[/cyan]")
    else:
        console.print("[yellow]⚠ Could not verify the token, trying to pair anyway...[/yellow]")

    console.print("\n[bold yellow]Complete pairing in Telegram:[/bold yellow]")
    console.print(f"  • Open [cyan]{prompt.deep_link}[/cyan] and press [cyan]Start[/cyan]")
    console.print(f"  • or open [cyan]@{bot.username}[/cyan], press Start and send the code: "
                  f"[bold green]{prompt.otp}[/bold green]")
    console.print(f"\n[dim]Waiting for the code... (timeout {prompt.timeout_seconds:g}s)[/dim]")
