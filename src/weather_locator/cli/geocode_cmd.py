"""Geocoding CLI commands for resolving and inspecting addresses."""

import asyncio
import json

import typer
from loguru import logger

geocode_app = typer.Typer()


@geocode_app.command("resolve")
def resolve(
    address: str = typer.Argument(..., help="Free-text address, comma separated"),
    country: str | None = typer.Option(None, "--country", help="ISO country code to restrict the search"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),  # noqa: FBT001
) -> None:
    """Resolve an address to coordinates."""
    from weather_locator.lib.geocoder import Err
    from weather_locator.services.geocoding_service import geocode_address

    with logger.contextualize(json_output=as_json):
        outcome = asyncio.run(geocode_address(address, country))

    if isinstance(outcome, Err):
        typer.echo(outcome.message, err=True)
        raise typer.Exit(code=1)

    location = outcome.value
    if as_json:
        typer.echo(json.dumps(location.to_dict()))
        return

    typer.echo(f"Address:    {location.address}")
    typer.echo(f"Latitude:   {location.latitude}")
    typer.echo(f"Longitude:  {location.longitude}")
    typer.echo(f"Confidence: {location.confidence if location.confidence is not None else '-'}")
    typer.echo(f"Postcode:   {location.postcode or '-'}")


@geocode_app.command("parse")
def parse(
    address: str = typer.Argument(..., help="Free-text address, comma separated"),
) -> None:
    """Show how an address is split into fields."""
    from weather_locator.lib.geocoder import parse_address

    for name, value in parse_address(address).to_dict().items():
        typer.echo(f"{name:>9}: {value or '-'}")
