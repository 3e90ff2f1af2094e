"""Economic data CLI commands."""

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from careerecon.application.formatting import (
    format_indicator_value,
    latest_period_label,
    latest_value,
)
from careerecon.cli.error_handler import handle_cli_error
from careerecon.cli.utils import async_command
from careerecon.domain.exceptions import EconomicDataError
from careerecon.infrastructure.config import get_settings
from careerecon.infrastructure.containers import get_container

economic_app = typer.Typer(help="BLS economic data commands")
console = Console()


@economic_app.command("series")
@async_command
async def show_series(
    series_ids: list[str] = typer.Argument(..., help="BLS series ids"),
    start_year: int | None = typer.Option(None, help="First year of data"),
    end_year: int | None = typer.Option(None, help="Last year of data"),
    limit: int = typer.Option(12, min=1, help="Observations to show per series"),
) -> None:
    """Fetch raw BLS series."""
    provider = get_container().series_data_provider()
    try:
        with console.status("[bold blue]Fetching series from BLS..."):
            series_list = await provider.get_multiple_series(series_ids, start_year, end_year)
    except (EconomicDataError, ValidationError) as e:
        handle_cli_error(e, context={"series_ids": series_ids})
    finally:
        await provider.close()

    returned = {series.series_id for series in series_list}
    for missing in [sid for sid in series_ids if sid not in returned]:
        console.print(f"[yellow]No data returned for {missing}[/yellow]")

    for series in series_list:
        table = Table(title=series.series_id)
        table.add_column("Period")
        table.add_column("Value", justify="right")
        table.add_column("Footnotes", style="dim")
        for point in series.data[:limit]:
            notes = "; ".join(f.text for f in point.footnotes if f.text)
            table.add_row(f"{point.period_name} {point.year}", point.value, notes)
        console.print(table)


@economic_app.command("career")
@async_command
async def show_career(
    career_id: str = typer.Argument(..., help="Internal career id, e.g. rn-001"),
) -> None:
    """Show economic indicators for a career."""
    container = get_container()
    service = container.career_economic_service()
    try:
        with console.status("[bold blue]Loading economic indicators..."):
            indicators = await service.economic_data_for(career_id)
    except (EconomicDataError, ValidationError) as e:
        handle_cli_error(e, context={"career_id": career_id})
    finally:
        await container.series_data_provider().close()

    if not indicators:
        console.print(f"No economic data configured for {career_id}", style="yellow")
        return

    table = Table(title=f"Economic indicators: {career_id}")
    table.add_column("Indicator")
    table.add_column("Series", style="dim")
    table.add_column("Latest", justify="right")
    table.add_column("Period")
    for indicator in indicators:
        table.add_row(
            indicator.display_name,
            indicator.series_id,
            format_indicator_value(indicator.display_name, latest_value(indicator)),
            latest_period_label(indicator),
        )
    console.print(table)


@economic_app.command("mappings")
def show_mappings() -> None:
    """List careers with configured BLS series."""
    mapper = get_container().entity_series_mapper()
    table = Table(title="Career series mappings")
    table.add_column("Career")
    table.add_column("Role")
    table.add_column("Series")
    for career_id in mapper.entity_ids():
        mapping = mapper.mapping_for(career_id)
        if mapping is None:
            continue
        for role, series_id in mapping.series_by_role.items():
            table.add_row(career_id, role.value, series_id or "-")
    console.print(table)


@economic_app.command("status")
def show_status() -> None:
    """Show BLS configuration."""
    settings = get_settings()
    provider = get_container().series_data_provider()
    config = provider.resolve_config()

    if provider.is_credential_configured():
        key_status = "[green]configured[/green]"
    else:
        key_status = "[yellow]not set[/yellow]"
    console.print(f"Registration key: {key_status}")
    console.print(f"Enrichment: {'enabled' if settings.enabled else 'disabled'}")
    console.print(f"Lookback: {settings.lookback_years} years")
    cache_state = "enabled" if config.cache_enabled else "disabled"
    console.print(f"Cache: {cache_state} (ttl {config.cache_ttl_ms} ms)")
    console.print(
        f"Retries: {config.max_retries} attempts, base delay {config.retry_base_delay_ms} ms"
    )
    console.print(f"Endpoint: {config.data_url}")
