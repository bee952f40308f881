#!/usr/bin/env python3
"""
CLI for the Certificate Review service.

Usage:
    python cli.py evaluate points.csv --min 0 --max 100 --unit bar
    python cli.py validate 100.0 100.05 0.02 0.1
    python cli.py lookup-uncertainty "apropriação de petróleo" --category petroleum
    python cli.py lookup-periodicity coriolis --category natural_gas
    python cli.py init-db
    python cli.py serve --port 8000

Commands:
    evaluate            Evaluate calibration points and print the analysis JSON
    validate            Check raw calibration values before evaluation
    lookup-uncertainty  Maximum admissible uncertainty of a measurement system
    lookup-periodicity  Calibration periodicity of an instrument
    init-db             Create database tables
    serve               Start the API server
"""
import json
import logging
from pathlib import Path

import click
import pandas as pd

from certreview import __version__
from certreview.config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


def load_points(path: str) -> list:
    """
    Read calibration point rows from a CSV or JSON file.

    CSV columns: point, referenceValue, measuredValue, uncertainty, errorLimit
    (snake_case headers are accepted too). JSON: a list of such objects.
    """
    source = Path(path)
    if source.suffix.lower() == '.json':
        with open(source, 'r', encoding='utf-8') as f:
            rows = json.load(f)
        if not isinstance(rows, list):
            raise click.BadParameter("JSON points file must contain a list", param_hint='POINTS_FILE')
        return rows

    df = pd.read_csv(source, dtype={'point': str})
    return df.to_dict(orient='records')


@click.group()
@click.version_option(version=__version__)
def cli():
    """Certificate Review CLI.

    Evaluate calibration results with the rule |Erro| + U ≤ EMA and
    query the regulatory reference tables.
    """
    pass


@cli.command()
@click.argument('points_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--min', 'range_min', required=True, type=float, help='Calibration range minimum')
@click.option('--max', 'range_max', required=True, type=float, help='Calibration range maximum')
@click.option('--unit', default='', help='Engineering unit of the range')
@click.option('--op-min', default=None, type=float, help='Operational range minimum')
@click.option('--op-max', default=None, type=float, help='Operational range maximum')
@click.option('--output', default=None, type=click.Path(dir_okay=False),
              help='Write the analysis JSON here instead of stdout')
def evaluate(points_file: str, range_min: float, range_max: float, unit: str,
             op_min: float, op_max: float, output: str):
    """Evaluate calibration points and export the analysis as JSON.

    Example:
        python cli.py evaluate data/pt-101.csv --min 0 --max 250 --unit bar
    """
    from certreview.config import get_config
    from certreview.domain.entities import CalibrationRange
    from certreview.domain.services import (
        process_calibration_points,
        generate_calibration_analysis,
        export_calibration_analysis_to_json,
    )

    rows = load_points(points_file)
    logger.info(f"Loaded {len(rows)} calibration points from {points_file}")

    points = process_calibration_points(rows, get_config().decimal_places)
    calibration_range = CalibrationRange(range_min, range_max, unit)
    operational_range = None
    if op_min is not None or op_max is not None:
        operational_range = CalibrationRange(
            op_min if op_min is not None else range_min,
            op_max if op_max is not None else range_max,
            unit,
        )

    analysis = generate_calibration_analysis(points, calibration_range, operational_range)
    document = export_calibration_analysis_to_json(analysis)

    if output:
        Path(output).write_text(document, encoding='utf-8')
        click.echo(f"Analysis written to {output}")
    else:
        click.echo(document)

    assessment = analysis.conformidade
    if assessment.all_conform:
        click.echo(click.style(f"✓ {assessment.total_points} points conform", fg='green'), err=True)
    else:
        click.echo(click.style(
            f"✗ {assessment.non_conforming_count} of {assessment.total_points} points non-conforming: "
            f"{', '.join(assessment.non_conforming_points)}",
            fg='red'
        ), err=True)


@cli.command()
@click.argument('reference_value')
@click.argument('measured_value')
@click.argument('uncertainty')
@click.argument('error_limit')
def validate(reference_value: str, measured_value: str, uncertainty: str, error_limit: str):
    """Validate raw values for one calibration point."""
    from certreview.domain.services import validate_calibration_data

    result = validate_calibration_data(reference_value, measured_value, uncertainty, error_limit)
    if result.is_valid:
        click.echo(click.style("Valid", fg='green'))
        return

    click.echo(click.style("Invalid:", fg='red'))
    for error in result.errors:
        click.echo(f"  - {error}")
    raise SystemExit(1)


@cli.command('lookup-uncertainty')
@click.argument('description')
@click.option('--category', required=True, type=click.Choice(['petroleum', 'natural_gas']))
def lookup_uncertainty(description: str, category: str):
    """Maximum admissible uncertainty of a measurement system (first match)."""
    from certreview.domain.services import RegulatoryDataService

    value = RegulatoryDataService().find_max_uncertainty_for_system(description, category)
    if value is None:
        click.echo(click.style("No matching measurement system", fg='yellow'))
        raise SystemExit(1)
    click.echo(value)


@cli.command('lookup-periodicity')
@click.argument('instrument')
@click.option('--category', required=True, type=click.Choice(['petroleum', 'natural_gas']))
def lookup_periodicity(instrument: str, category: str):
    """Fiscal calibration periodicity of an instrument (first match)."""
    from certreview.domain.services import RegulatoryDataService

    value = RegulatoryDataService().find_calibration_periodicity(instrument, category)
    if value is None:
        click.echo(click.style("No matching instrument", fg='yellow'))
        raise SystemExit(1)
    click.echo(value)


@cli.command('init-db')
def init_db_command():
    """Create the database tables."""
    from certreview.models import init_db, DATABASE_URL

    init_db()
    click.echo(click.style(f"Database initialized: {DATABASE_URL}", fg='green'))


@cli.command()
@click.option('--host', default='127.0.0.1', help='Host to bind')
@click.option('--port', default=8000, type=int, help='Port to bind')
@click.option('--reload', is_flag=True, help='Enable auto-reload')
def serve(host: str, port: int, reload: bool):
    """Start the API server."""
    import uvicorn

    click.echo(click.style(f'Starting Certificate Review API on {host}:{port}', fg='cyan', bold=True))
    uvicorn.run('certreview.main:app', host=host, port=port, reload=reload)


if __name__ == '__main__':
    cli()
