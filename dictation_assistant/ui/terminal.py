"""
Rich-based terminal output.

Renders model listings, settings and enhancement plans for the command-line
interface.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..enhancement.planner import EnhancementPlan
from ..models.catalog import TranscriptionModelDefinition, WhisperModelInfo
from ..models.reasoning import ReasoningModelWithProvider


class TerminalUI:
    """Rich terminal renderer for the dictation assistant CLI."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the terminal UI."""
        self.console = console or Console()

    def _table(self, title: str) -> Table:
        return Table(
            title=title,
            title_style="bold cyan",
            box=box.ROUNDED,
            show_header=True,
            header_style="bold white"
        )

    def show_reasoning_models(
        self,
        models: Sequence[ReasoningModelWithProvider],
        current: Optional[str] = None
    ) -> None:
        """
        Display reasoning models grouped by provider.

        Args:
            models: Models to list, in display order
            current: Id of the selected model, highlighted in the listing
        """
        if not models:
            self.console.print("[yellow]No reasoning models found.[/yellow]")
            return

        table = self._table("Reasoning Models")
        table.add_column("Provider", style="magenta")
        table.add_column("Model", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Description", style="dim")

        for model in models:
            marker = " ⭐" if model.value == current else ""
            table.add_row(model.provider, model.value + marker, model.label, model.description)

        self.console.print(table)

    def show_transcription_models(
        self,
        provider_name: str,
        models: Sequence[TranscriptionModelDefinition]
    ) -> None:
        table = self._table(f"{provider_name} Transcription Models")
        table.add_column("Model", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Description", style="dim")
        for model in models:
            table.add_row(model.id, model.name, model.description)
        self.console.print(table)

    def show_whisper_models(self, models: Dict[str, WhisperModelInfo]) -> None:
        table = self._table("Local Whisper Models")
        table.add_column("Model", style="cyan")
        table.add_column("Size", style="yellow", justify="right")
        table.add_column("Description", style="white")
        for model_id, info in models.items():
            name = f"{model_id} ⭐" if info.recommended else model_id
            table.add_row(name, info.size, info.description)
        self.console.print(table)

    def show_settings(self, rows: List[Tuple[str, Any, bool]]) -> None:
        """
        Display settings as a table.

        Args:
            rows: (name, value, stored) triples; unstored values are defaults
        """
        table = self._table("Settings")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")
        table.add_column("Source", style="dim")
        for name, value, stored in rows:
            table.add_row(name, _display_value(name, value), "stored" if stored else "default")
        self.console.print(table)

    def show_value(self, label: str, value: str) -> None:
        """Print a single result line."""
        line = Text()
        line.append(f"{label}: ", style="bold")
        line.append(value)
        self.console.print(line)

    def show_plan(self, plan: EnhancementPlan) -> None:
        """Display an enhancement plan, or why enhancement cannot run."""
        if not plan.ready:
            self.console.print(Panel(
                Text(f"⚠️  {plan.message}", style="yellow"),
                title="Not Ready",
                title_align="center",
                border_style="yellow",
                padding=(1, 2)
            ))
            return

        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column(style="bold cyan")
        table.add_column(style="white")
        table.add_row("Provider", f"{plan.provider_label} ({plan.provider})")
        table.add_row("Model", plan.model_label)
        if plan.requires_api_key:
            table.add_row("API key", "configured" if plan.has_api_key else "[red]missing[/red]")
        if plan.base_url:
            table.add_row("Base URL", plan.base_url)
        if plan.download_url:
            table.add_row("Download", plan.download_url)

        self.console.print(Panel(
            table,
            title="✨ Enhancement Plan",
            title_align="center",
            border_style="green",
            padding=(1, 2)
        ))
        self.console.print(Panel(
            Text(plan.prompt if plan.prompt is not None else plan.system_prompt),
            title="Prompt" if plan.prompt is not None else "System Prompt",
            border_style="dim"
        ))

    def show_error(self, error: Exception) -> None:
        """
        Display error message with Rich formatting.

        Args:
            error: Exception to display
        """
        error_message = str(error)
        if isinstance(error, KeyError) and error.args:
            error_message = str(error.args[0])

        # Provide helpful guidance for common errors
        if "model" in error_message.lower():
            guidance = "\n\n💡 Run 'dictation-assistant models' to see the catalog."
        elif "setting" in error_message.lower():
            guidance = "\n\n💡 Run 'dictation-assistant settings show' to see valid names."
        else:
            guidance = ""

        self.console.print(Panel(
            Text(f"❌ {error_message}{guidance}", style="red"),
            title="Error",
            title_align="center",
            border_style="red",
            padding=(1, 2)
        ))

    def show_success(self, message: str) -> None:
        self.console.print(f"[green]✅ {message}[/green]")


def _display_value(name: str, value: Any) -> str:
    if name.endswith("_api_key") and value:
        return value[:4] + "…" if len(value) > 8 else "••••"
    if name == "custom_prompts":
        return "custom" if value else "defaults"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value) if value != "" else '""'
