from typing import Callable, Optional

import click
from rich.console import Console

from letsyolo.agents.catalog import AGENT_ALIASES, parse_agent_type
from letsyolo.errors import LetsYoloError
from letsyolo.keys.setup import SecretSetup, describe_suggestion
from letsyolo.keys.status import check_api_key_status
from letsyolo.logging_setup import configure_logging
from letsyolo.models import ApiKeyDefinition, SecretRecord, ToggleResult
from letsyolo.services import AppServices, build_services
from letsyolo.settings import RuntimeContext
from letsyolo.tui import YoloConsoleUI


AGENT_CHOICES = sorted(AGENT_ALIASES)


def _agent_argument() -> Callable:
    return click.argument(
        "agent",
        required=False,
        type=click.Choice(AGENT_CHOICES, case_sensitive=False),
    )


def _services_from_obj(obj: dict) -> AppServices:
    services = obj.get("services")
    if services is None:
        try:
            services = build_services(RuntimeContext.from_process())
        except LetsYoloError as exc:
            raise click.ClickException(str(exc))
        obj["services"] = services
    return services


def _ui(services: AppServices) -> YoloConsoleUI:
    return YoloConsoleUI(Console(), home=services.context.home)


def _exit_on_failures(results: list[ToggleResult]) -> None:
    if any(not item.success for item in results):
        raise click.exceptions.Exit(1)


def _prompt_for_key(key_def: ApiKeyDefinition, record: Optional[SecretRecord]) -> str:
    suggestion = describe_suggestion(record)
    current = f" [current: {suggestion}]" if suggestion else ""
    click.echo(f"\n  {key_def.display_name} ({key_def.agent}){current}")
    click.echo(f"  {key_def.hint}")
    return click.prompt(
        f"  {key_def.env_var}",
        default="",
        show_default=False,
        hide_input=True,
    )


def _confirm_suggestion(key_def: ApiKeyDefinition, record: SecretRecord) -> bool:
    return click.confirm(
        f"  Save {key_def.env_var} ({describe_suggestion(record)}) to the secrets file?",
        default=False,
    )


def _render_status(services: AppServices) -> None:
    ui = _ui(services)
    statuses = services.detection.detect_all(services.catalog.values())
    ui.render_detection(statuses)
    ui.render_toggle_results(services.toggles.status_all(statuses), "current status")
    try:
        rows = check_api_key_status(services.context, services.store)
    except LetsYoloError as exc:
        raise click.ClickException(str(exc))
    ui.render_key_status(rows, services.store.path)


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Configure YOLO mode for AI coding agents."""
    configure_logging(verbose)
    if ctx.obj is None:
        ctx.obj = {}
    if ctx.invoked_subcommand is None:
        _render_status(_services_from_obj(ctx.obj))


@cli.command(help="Detect agents and show current YOLO and API key status.")
@click.pass_obj
def status(obj: dict) -> None:
    _render_status(_services_from_obj(obj))


@cli.command(help="Detect installed agents.")
@click.pass_obj
def detect(obj: dict) -> None:
    services = _services_from_obj(obj)
    _ui(services).render_detection(
        services.detection.detect_all(services.catalog.values())
    )


@cli.command(help="Enable YOLO mode for one agent, or all detected agents.")
@_agent_argument()
@click.pass_obj
def enable(obj: dict, agent: Optional[str]) -> None:
    services = _services_from_obj(obj)
    ui = _ui(services)
    if agent:
        results = [services.toggles.enable(parse_agent_type(agent))]
        action = "enable"
    else:
        results = services.toggles.enable_all()
        action = "enable all"
    ui.render_toggle_results(results, action)
    ui.render_ready_to_run(results, services.catalog)
    _exit_on_failures(results)


@cli.command(help="Disable YOLO mode for one agent, or all agents.")
@_agent_argument()
@click.pass_obj
def disable(obj: dict, agent: Optional[str]) -> None:
    services = _services_from_obj(obj)
    if agent:
        results = [services.toggles.disable(parse_agent_type(agent))]
        action = "disable"
    else:
        results = services.toggles.disable_all()
        action = "disable all"
    _ui(services).render_toggle_results(results, action)
    _exit_on_failures(results)


@cli.command(help="Interactive API key setup.")
@click.pass_obj
def setup(obj: dict) -> None:
    services = _services_from_obj(obj)
    ui = _ui(services)
    ui.render_setup_intro()
    try:
        result = SecretSetup(
            store=services.store,
            scanner=services.scanner,
            prompt=_prompt_for_key,
            confirm=_confirm_suggestion,
        ).run()
    except LetsYoloError as exc:
        raise click.ClickException(str(exc))

    hooked = services.profiles.install() if result.saved else []
    ui.render_setup_result(result, services.store.path, hooked)


@cli.command(help="Show API key status.")
@click.pass_obj
def keys(obj: dict) -> None:
    services = _services_from_obj(obj)
    try:
        rows = check_api_key_status(services.context, services.store)
    except LetsYoloError as exc:
        raise click.ClickException(str(exc))
    _ui(services).render_key_status(rows, services.store.path)


@cli.command(help="Show recommended per-session CLI flags for each agent.")
@click.pass_obj
def flags(obj: dict) -> None:
    services = _services_from_obj(obj)
    _ui(services).render_flags(list(services.catalog.values()))


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 130
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
