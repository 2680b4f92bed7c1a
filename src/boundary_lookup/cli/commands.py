"""CLI commands for boundary-lookup."""

import json
import logging
from pathlib import Path
from typing import Optional

import click
import pandas as pd

from boundary_lookup import (
    AdminLevel,
    BoundaryLookup,
    FeatureLoadError,
    SearchEntry,
    format_dms,
)
from boundary_lookup.data.constants import DATA_ENV_VAR, default_dataset_path

LEVEL_CHOICES = [level.keyword for level in AdminLevel.ordered()]

data_option = click.option(
    "--data",
    "-d",
    "data_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=DATA_ENV_VAR,
    default=None,
    help=f"Boundary dataset (GeoJSON, shapefile, GeoPackage, GeoParquet). "
    f"Defaults to ${DATA_ENV_VAR} or {default_dataset_path()}",
)


def _open(data_path: Optional[Path]) -> BoundaryLookup:
    """Load and index the configured dataset."""
    path = data_path or default_dataset_path()
    try:
        return BoundaryLookup.from_file(path)
    except FeatureLoadError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(package_name="boundary-lookup")
@click.option("--verbose", "-V", is_flag=True, help="Log index building details")
def cli(verbose: bool):
    """Boundary-lookup: find administrative units by coordinate or name."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("coordinates", nargs=-1, required=True)
@data_option
def locate(coordinates: tuple[str, ...], data_path: Optional[Path]):
    """Find the unit containing COORDINATES ("lat, lon" or DMS)."""
    text = " ".join(coordinates)
    lookup = _open(data_path)
    result = lookup.locate_text(text)

    if result.match_type == "parse_error":
        raise click.ClickException(f"Cannot parse coordinates: {text}")

    click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str))


def _echo_entry(entry: SearchEntry) -> None:
    parents = f"  ({entry.parents_label})" if entry.parents_label else ""
    click.echo(f"  {entry.level.label:9s} {entry.name}{parents}  [{entry.feature_count}]")


@cli.command()
@click.argument("query")
@click.option(
    "--level",
    "-l",
    default=None,
    type=click.Choice(LEVEL_CHOICES),
    help="Restrict results to one level (same as a :level prefix)",
)
@click.option("--limit", "-n", default=20, show_default=True, help="Maximum results shown")
@click.option("--keys", is_flag=True, help="Show entry keys")
@data_option
def search(query: str, level: Optional[str], limit: int, keys: bool, data_path: Optional[Path]):
    """Search administrative units by name."""
    lookup = _open(data_path)
    results = lookup.search(query, level)

    if results.suggestions:
        click.echo("Level filters:")
        for keyword in results.suggestions:
            click.echo(f"  :{keyword:10s} {AdminLevel(keyword).label}")

    if not results:
        if not results.suggestions:
            click.echo("No matches.")
        return

    shown = 0
    for title, group in (
        ("Matches", results.name_matches),
        ("Matches in parent units", results.parent_only_matches),
    ):
        group = group[: max(0, limit - shown)]
        if not group:
            continue
        click.echo(f"\n{title}:")
        for entry in group:
            _echo_entry(entry)
            if keys:
                click.echo(f"            {entry.key}")
        shown += len(group)

    if len(results) > shown:
        click.echo(f"\n... {len(results) - shown} more")


@cli.command()
@click.argument("key")
@data_option
def entry(key: str, data_path: Optional[Path]):
    """Show a search entry by KEY, with the units it contains."""
    lookup = _open(data_path)
    found = lookup.entry(key)
    if found is None:
        raise click.ClickException(f"No entry with key '{key}'")

    output = found.to_dict()
    output["stats"] = dict(lookup.region_stats(found).rows(found.level))
    box = lookup.entry_bounds(found)
    output["bounds"] = box.to_bounds() if box else None
    click.echo(json.dumps(output, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path())
@click.option("--lat-column", default="latitude", show_default=True)
@click.option("--lon-column", default="longitude", show_default=True)
@data_option
def batch(
    input_file: str,
    output_file: str,
    lat_column: str,
    lon_column: str,
    data_path: Optional[Path],
):
    """Locate every row of a CSV file of coordinates."""
    input_path = Path(input_file)

    if input_path.suffix != ".csv":
        raise click.ClickException(
            f"Unsupported file format: {input_path.suffix}. Only CSV is supported."
        )
    df = pd.read_csv(input_path)

    for column in (lat_column, lon_column):
        if column not in df.columns:
            raise click.ClickException(f"Column '{column}' not found in input file")

    lookup = _open(data_path)
    output_df = lookup.locate_batch(df, lat_column=lat_column, lon_column=lon_column, progress=True)

    output_path = Path(output_file)
    if output_path.suffix == ".parquet":
        output_df.to_parquet(output_path)
    else:
        output_df.to_csv(output_path, index=False)

    click.echo(f"Processed {len(df)} coordinates -> {output_file}")

    matched = int(output_df["feature_index"].notna().sum())
    if len(df):
        click.echo(f"Matched: {matched}/{len(df)} ({100 * matched / len(df):.1f}%)")


@cli.command()
@click.argument("lat", type=click.FloatRange(-90, 90))
@click.argument("lon", type=click.FloatRange(-180, 180))
def dms(lat: float, lon: float):
    """Format LAT LON as degrees, minutes and seconds."""
    click.echo(format_dms(lat, lon))


@cli.command()
@data_option
def info(data_path: Optional[Path]):
    """Show information about the boundary dataset."""
    lookup = _open(data_path)
    spatial = lookup.spatial_index

    click.echo(f"\nFeatures: {len(lookup)}")
    click.echo(f"Grid: {spatial.grid_size}x{spatial.grid_size} ({spatial.cell_count} populated cells)")
    if spatial.bounds:
        minx, miny, maxx, maxy = spatial.bounds
        click.echo(f"Bounds: lon {minx:.5f} .. {maxx:.5f}, lat {miny:.5f} .. {maxy:.5f}")

    click.echo("\nSearch entries:")
    for level, count in lookup.search_index.level_counts().items():
        click.echo(f"  {level.label:10s} {count}")


if __name__ == "__main__":
    cli()
