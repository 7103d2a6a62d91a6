"""Click CLI for dataset generation, live predictions and location analytics.

Provides four commands:
- ``generate``: Build a synthetic corpus and export it as CSV (and JSON).
- ``predict``: Estimate and classify crowd density for one visit.
- ``random``: Predict a randomly drawn upcoming visit.
- ``analytics``: Per-location quartiles and busiest hours.
"""

import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from .generation.generator import DatasetGenerator, is_weekend
from .model.footfall import VisitContext
from .model.profiles import FESTIVAL_DATES, LOCATIONS, WEATHER_CONDITIONS
from .predictor import CrowdDensityPredictor, Prediction
from .utils.config import AppConfig, load_config
from .utils.export import (
    SAMPLE_JSON_NAME,
    default_csv_name,
    export_csv,
    export_json_sample,
)
from .utils.logger import setup_from_config

logger = logging.getLogger(__name__)


def _load_app_config(config_path: Optional[str]) -> AppConfig:
    """Load the config file (or defaults) and apply its logging section.

    ``--verbose`` on the group overrides the configured level with DEBUG.
    """
    try:
        app_config = load_config(config_path) if config_path else AppConfig()
    except (TypeError, ValueError) as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc

    verbose = (click.get_current_context().obj or {}).get("verbose", False)
    setup_from_config(app_config.logging, level="DEBUG" if verbose else None)
    return app_config


def _build_predictor(
    app_config: AppConfig,
    samples: Optional[int],
    seed: Optional[int],
    show_progress: bool = True,
    top_k: int = 5,
) -> CrowdDensityPredictor:
    """Create a predictor and build its corpus with a progress bar."""
    overrides = {}
    if samples is not None:
        overrides["count"] = samples
    if seed is not None:
        overrides["seed"] = seed
    try:
        gen_config = replace(app_config.generator, **overrides)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    predictor = CrowdDensityPredictor(DatasetGenerator(gen_config), top_k=top_k)

    if not show_progress:
        predictor.build(gen_config.count)
        return predictor

    with click.progressbar(length=gen_config.count, label="Generating dataset") as bar:
        last_pos = 0

        def progress_callback(current: int, total: int) -> None:
            nonlocal last_pos
            delta = current - last_pos
            if delta > 0:
                bar.update(delta)
                last_pos = current

        predictor.build(gen_config.count, progress_callback=progress_callback)

    return predictor


def _echo_prediction(prediction: Prediction, quartiles_text: str) -> None:
    click.echo(f"Location: {prediction.context.location.replace('_', ' ')}")
    click.echo(
        f"  Hour: {prediction.context.hour}:00 | "
        f"Weather: {prediction.context.weather_condition} | "
        f"Temp: {prediction.context.temperature:.1f}C"
    )
    click.echo(
        f"  Festival: {'yes' if prediction.context.is_festival else 'no'} | "
        f"Holiday: {'yes' if prediction.context.is_holiday else 'no'}"
    )
    click.echo(f"Estimated footfall: {prediction.footfall:,}")
    click.echo(f"Density: {prediction.tier.display_name}")
    click.echo(f"Quartiles (q1 / q2 / q3): {quartiles_text}")
    click.echo(prediction.suggestion)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True),
    help="Configuration YAML",
)
samples_option = click.option(
    "--samples",
    "-n",
    type=click.IntRange(min=0),
    help="Number of synthetic observations (overrides config)",
)
seed_option = click.option(
    "--seed",
    type=int,
    help="Random seed for reproducible output",
)


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Temple Crowd CLI - Crowd density prediction for temples and tourist spots."""
    ctx.ensure_object(dict)["verbose"] = verbose


@cli.command()
@config_option
@samples_option
@seed_option
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(),
    help="Output CSV path",
)
@click.option("--json-sample", is_flag=True, help="Also write a JSON sample")
def generate(
    config_path: Optional[str],
    samples: Optional[int],
    seed: Optional[int],
    output_path: Optional[str],
    json_sample: bool,
) -> None:
    """Generate a labeled synthetic dataset and export it as CSV.

    Example:
        temple-crowd generate -n 50000 --seed 7 -o data/dataset.csv
    """
    app_config = _load_app_config(config_path)
    predictor = _build_predictor(app_config, samples, seed)

    if len(predictor.corpus) == 0:
        click.echo("No observations generated, nothing to export", err=True)
        raise SystemExit(1)

    out = (
        Path(output_path)
        if output_path
        else Path(app_config.export.output_dir) / default_csv_name()
    )
    export_csv(predictor.corpus, str(out))

    click.echo(f"\nDataset saved to: {out}")
    click.echo(f"  Samples: {len(predictor.corpus):,}")
    click.echo(f"  Quartiles (q1 / q2 / q3): {predictor.quartiles}")

    if json_sample:
        sample_path = out.parent / SAMPLE_JSON_NAME
        export_json_sample(
            predictor.corpus, str(sample_path), limit=app_config.export.sample_size
        )
        click.echo(f"  JSON sample: {sample_path}")


@cli.command()
@config_option
@samples_option
@seed_option
@click.option(
    "--location",
    "-l",
    required=True,
    type=click.Choice(LOCATIONS),
    help="Location to predict",
)
@click.option("--hour", "-h", default=18, type=click.IntRange(0, 23), help="Hour of day")
@click.option(
    "--weather",
    "-w",
    default="Clear",
    type=click.Choice(WEATHER_CONDITIONS),
    help="Weather condition",
)
@click.option("--temperature", "-t", default=26.0, type=float, help="Temperature (C)")
@click.option("--festival/--no-festival", default=False, help="Festival day")
@click.option("--holiday/--no-holiday", default=False, help="Weekend or holiday")
@click.option(
    "--date",
    "visit_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Visit date; marks known festival days and weekends",
)
@click.option(
    "--per-location",
    is_flag=True,
    help="Classify against the location's own quartiles",
)
@click.option("--json", "as_json", is_flag=True, help="Print the prediction as JSON")
def predict(
    config_path: Optional[str],
    samples: Optional[int],
    seed: Optional[int],
    location: str,
    hour: int,
    weather: str,
    temperature: float,
    festival: bool,
    holiday: bool,
    visit_date: Optional[datetime],
    per_location: bool,
    as_json: bool,
) -> None:
    """Predict crowd density for a single visit.

    Example:
        temple-crowd predict -l Mysore_Palace -h 18 -w Clear -t 26
    """
    if visit_date is not None:
        festival = festival or visit_date.date().isoformat() in FESTIVAL_DATES
        holiday = holiday or is_weekend(visit_date.date())

    app_config = _load_app_config(config_path)
    predictor = _build_predictor(app_config, samples, seed, show_progress=not as_json)
    prediction = predictor.predict(
        VisitContext(
            location=location,
            hour=hour,
            weather_condition=weather,
            temperature=temperature,
            is_festival=festival,
            is_holiday=holiday,
        ),
        per_location=per_location,
    )

    if as_json:
        click.echo(json.dumps(prediction.to_dict(), indent=2))
        return

    quartiles = predictor.classifier.quartiles_for(location if per_location else None)
    _echo_prediction(prediction, str(quartiles))


@cli.command("random")
@config_option
@samples_option
@seed_option
@click.option(
    "--days-ahead",
    default=90,
    type=click.IntRange(min=1),
    help="Draw the visit date from this many upcoming days",
)
def random_visit(
    config_path: Optional[str],
    samples: Optional[int],
    seed: Optional[int],
    days_ahead: int,
) -> None:
    """Predict crowd density for a randomly drawn upcoming visit.

    Example:
        temple-crowd random --seed 3
    """
    app_config = _load_app_config(config_path)
    predictor = _build_predictor(app_config, samples, seed)
    visit_date, context = predictor.generator.random_context(days_ahead)
    prediction = predictor.predict(context)

    click.echo(f"\nVisit date: {visit_date.isoformat()}")
    _echo_prediction(prediction, str(predictor.quartiles))


@cli.command()
@config_option
@samples_option
@seed_option
@click.option(
    "--location",
    "-l",
    "locations",
    multiple=True,
    type=click.Choice(LOCATIONS),
    help="Restrict output to these locations",
)
@click.option("--top", "-k", default=5, type=click.IntRange(min=1), help="Top hours")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Write analytics as JSON to this path",
)
def analytics(
    config_path: Optional[str],
    samples: Optional[int],
    seed: Optional[int],
    locations: tuple[str, ...],
    top: int,
    output: Optional[str],
) -> None:
    """Show per-location quartiles and busiest hours.

    Example:
        temple-crowd analytics -n 20000 -l Mysore_Palace -o analytics.json
    """
    app_config = _load_app_config(config_path)
    predictor = _build_predictor(app_config, samples, seed, top_k=top)

    stats = predictor.location_stats()
    selected = [stats[name] for name in (locations or LOCATIONS)]

    if output:
        report = {
            "samples": len(predictor.corpus),
            "global_quartiles": predictor.quartiles.to_dict(),
            "locations": [s.to_dict() for s in selected],
            "generated_at": datetime.now().isoformat(),
        }
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(report, f, indent=2)
        click.echo(f"Analytics saved to: {output_path}")
        return

    click.echo(f"\nSamples: {len(predictor.corpus):,}")
    click.echo(f"Global quartiles (q1 / q2 / q3): {predictor.quartiles}")
    for s in selected:
        click.echo(f"\n{s.location.replace('_', ' ')}")
        click.echo(f"  Quartiles (q1 / q2 / q3): {s.quartiles}")
        click.echo("  Top hours (avg footfall)")
        for h in s.top_hours:
            click.echo(f"    {h.hour}:00 - {h.average_footfall:,} avg")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
