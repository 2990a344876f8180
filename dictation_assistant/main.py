"""
Command-line entry point for the dictation assistant.

Wires the catalog, registry, resolver and settings together and exposes
them for inspecting models, resolving providers and editing settings.
"""

from typing import Optional
from pathlib import Path
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import resolve_catalog_path, resolve_settings_path
from .enhancement.planner import EnhancementPlanner
from .models.catalog import CatalogError
from .models.prompts import select_system_prompt, format_prompt
from .models.reasoning import ReasoningCatalog
from .models.registry import create_model_registry
from .models.resolver import ProviderResolver
from .settings.cells import CELLS_BY_KEY
from .settings.settings import Settings
from .settings.storage import JsonFileStorage, SettingsStorage
from .ui.terminal import TerminalUI

DERIVED_SETTINGS = ("reasoning_provider",)


class AssistantApp:
    """
    Application object that owns and connects all components.

    There is exactly one registry per app; everything that needs it gets it
    passed in here.
    """

    def __init__(
        self,
        settings_path: Optional[Path] = None,
        catalog_path: Optional[Path] = None,
        storage: Optional[SettingsStorage] = None,
        ui: Optional[TerminalUI] = None
    ):
        """
        Initialize the application.

        Args:
            settings_path: Settings file, see config.resolve_settings_path
            catalog_path: Catalog override, see config.resolve_catalog_path
            storage: Storage to use instead of the settings file
            ui: Terminal renderer
        """
        self.registry = create_model_registry(resolve_catalog_path(catalog_path))
        self.reasoning = ReasoningCatalog(self.registry)
        self.resolver = ProviderResolver(self.reasoning)
        self.storage = storage or JsonFileStorage(resolve_settings_path(settings_path))
        self.settings = Settings(self.storage, self.resolver)
        self.planner = EnhancementPlanner(self.settings, self.registry, self.reasoning)
        self.ui = ui or TerminalUI()

    def setting_name(self, name: str) -> str:
        """Accept a setting's attribute name or its stored camelCase key."""
        if name in DERIVED_SETTINGS or name in self.settings.names():
            return name
        if name in CELLS_BY_KEY:
            return CELLS_BY_KEY[name].name
        if name == "reasoningProvider":
            return "reasoning_provider"
        raise KeyError(f"Unknown setting: {name}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)]
    )


def _fail(app: AssistantApp, error: Exception) -> None:
    app.ui.show_error(error)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--settings-file',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Settings file (default: per-user config directory)'
)
@click.option(
    '--catalog',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Model catalog JSON to use instead of the bundled one'
)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
@click.pass_context
def main(ctx: click.Context, settings_file: Optional[Path], catalog: Optional[Path], verbose: bool) -> None:
    """
    Dictation Assistant - AI model routing for dictation cleanup.

    Lists the known reasoning and transcription models, shows which provider
    serves a model and manages the settings that select them.
    """
    _configure_logging(verbose)
    try:
        ctx.obj = AssistantApp(settings_path=settings_file, catalog_path=catalog)
    except CatalogError as e:
        raise click.ClickException(str(e))


@main.command()
@click.option('--provider', 'provider_id', help='Only list models of this provider')
@click.pass_obj
def models(app: AssistantApp, provider_id: Optional[str]) -> None:
    """List reasoning models from every provider."""
    all_models = app.reasoning.get_all_reasoning_models()
    if provider_id:
        all_models = [m for m in all_models if m.provider == provider_id]
    app.ui.show_reasoning_models(all_models, current=app.settings.reasoning_model)


@main.command()
@click.argument('model_id')
@click.pass_obj
def resolve(app: AssistantApp, model_id: str) -> None:
    """Print the provider that serves MODEL_ID."""
    provider = app.resolver.resolve_provider(model_id)
    if not provider:
        _fail(app, LookupError(f"No provider found for model '{model_id}'"))
    click.echo(provider)


@main.command()
@click.argument('model_id')
@click.pass_obj
def label(app: AssistantApp, model_id: str) -> None:
    """Print the display label of MODEL_ID."""
    click.echo(app.reasoning.get_reasoning_model_label(model_id))


@main.command('download-url')
@click.argument('model_id')
@click.pass_obj
def download_url(app: AssistantApp, model_id: str) -> None:
    """Print the download URL of local model MODEL_ID."""
    lookup = app.registry.get_model(model_id)
    if not lookup:
        _fail(app, LookupError(f"'{model_id}' is not a local model in the catalog"))
    click.echo(lookup.provider.get_download_url(lookup.model))


@main.command('format-prompt')
@click.argument('text')
@click.option('--model', 'model_id', help='Local model whose provider template is used')
@click.option('--template', help='Template containing {system} and {user}')
@click.option('--system', 'system_prompt', help='System prompt (default: the configured prompt)')
@click.pass_obj
def format_prompt_command(
    app: AssistantApp,
    text: str,
    model_id: Optional[str],
    template: Optional[str],
    system_prompt: Optional[str]
) -> None:
    """Render the local model prompt for TEXT."""
    if bool(model_id) == bool(template):
        raise click.UsageError("Pass exactly one of --model or --template")

    if system_prompt is None:
        system_prompt = select_system_prompt(
            text, app.settings.agent_name, app.settings.effective_prompts()
        )

    if template:
        click.echo(format_prompt(template, text, system_prompt))
        return

    lookup = app.registry.get_model(model_id)
    if not lookup:
        _fail(app, LookupError(f"'{model_id}' is not a local model in the catalog"))
    click.echo(lookup.provider.format_prompt(text, system_prompt))


@main.command('transcription-models')
@click.argument('provider_id', required=False)
@click.pass_obj
def transcription_models(app: AssistantApp, provider_id: Optional[str]) -> None:
    """List cloud transcription models, optionally for one PROVIDER_ID."""
    providers = app.registry.get_transcription_providers()
    if provider_id:
        provider = app.registry.get_transcription_provider(provider_id)
        if not provider:
            _fail(app, LookupError(f"Unknown transcription provider '{provider_id}'"))
        providers = [provider]
    for provider in providers:
        app.ui.show_transcription_models(provider.name, provider.models)


@main.command('whisper-models')
@click.pass_obj
def whisper_models(app: AssistantApp) -> None:
    """List the local Whisper model sizes."""
    app.ui.show_whisper_models(app.registry.get_whisper_models())


@main.command()
@click.argument('text')
@click.pass_obj
def check(app: AssistantApp, text: str) -> None:
    """Show how TEXT would be enhanced with the current settings."""
    plan = app.planner.plan(text)
    app.ui.show_plan(plan)
    if not plan.ready:
        raise SystemExit(1)


@main.group()
def settings() -> None:
    """Inspect and change persisted settings."""


@settings.command('show')
@click.pass_obj
def settings_show(app: AssistantApp) -> None:
    """Show every setting and where its value comes from."""
    rows = [
        (name, app.settings.get(name), app.settings.is_stored(name))
        for name in app.settings.names()
    ]
    rows.append(("reasoning_provider", app.settings.reasoning_provider, False))
    app.ui.show_settings(rows)


@settings.command('get')
@click.argument('name')
@click.pass_obj
def settings_get(app: AssistantApp, name: str) -> None:
    """Print the value of setting NAME."""
    try:
        name = app.setting_name(name)
    except KeyError as e:
        _fail(app, e)

    if name == "reasoning_provider":
        click.echo(app.settings.reasoning_provider)
        return

    value = app.settings.get(name)
    if value is None:
        click.echo("")
    else:
        click.echo(app.settings.cell(name).serialize(value))


@settings.command('set')
@click.argument('name')
@click.argument('value')
@click.pass_obj
def settings_set(app: AssistantApp, name: str, value: str) -> None:
    """Store VALUE for setting NAME."""
    try:
        name = app.setting_name(name)
    except KeyError as e:
        _fail(app, e)

    if name in DERIVED_SETTINGS:
        _fail(app, ValueError(f"Setting {name} is derived from reasoning_model and cannot be set"))

    parsed = app.settings.parse(name, value)
    if parsed is None:
        # Writing None would clear the stored value
        _fail(app, ValueError(f"Invalid value for setting {name}: {value!r}"))

    app.settings.set(name, parsed)
    app.ui.show_success(f"{name} updated")
    if name == "reasoning_model" and not app.settings.reasoning_provider:
        app.ui.show_value("Warning", f"no provider is known for model '{value}'")


@settings.command('reset')
@click.argument('name')
@click.pass_obj
def settings_reset(app: AssistantApp, name: str) -> None:
    """Reset setting NAME to its default."""
    try:
        name = app.setting_name(name)
    except KeyError as e:
        _fail(app, e)

    if name in DERIVED_SETTINGS:
        _fail(app, ValueError(f"Setting {name} is derived from reasoning_model and cannot be reset"))

    app.settings.reset(name)
    app.ui.show_success(f"{name} reset to default")


if __name__ == "__main__":
    main()
