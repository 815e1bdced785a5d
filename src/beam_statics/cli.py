"""Línea de comandos de beam_statics.

Uso::

    beam-statics analyze <beam.json> [--csv DIR] [--pdf FILE] [--json FILE]
    beam-statics template <id> [-o beam.json]
    beam-statics templates
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional

import click

from beam_statics.domain.labels import fmt_num, unit_labels
from beam_statics.domain.results import AnalysisResults
from beam_statics.engine.analysis import analyze_beam
from beam_statics.engine.errors import ConfigurationError
from beam_statics.services.csv_export import export_csv_files
from beam_statics.services.logging_setup import setup_logging
from beam_statics.services.report_pdf import ReportHeader, export_analysis_pdf
from beam_statics.services.serialization import (
    SerializationError, load_beam_json, save_beam_json, save_results_json,
)
from beam_statics.services.templates import TEMPLATES, categories, get_template, templates_by_category
from beam_statics.view.renderer_vm import save_diagram_images


@click.group()
@click.version_option(package_name="beam-statics")
@click.option("--log-dir", default=None, help="Directory for the rotating log file.")
@click.option("-v", "--verbose", is_flag=True, help="Debug-level logging.")
def main(log_dir: Optional[str], verbose: bool) -> None:
    """Statically determinate beam analysis: reactions, V(x), M(x) and checks."""
    setup_logging(log_dir=log_dir, level=logging.DEBUG if verbose else logging.WARNING)


def _print_summary(results: AnalysisResults, units: str) -> None:
    u = unit_labels(units)
    click.echo("Reactions:")
    for r in results.reactions:
        line = f"  {r.support_id} @ x={fmt_num(r.position, 3)}: V={fmt_num(r.vertical_force, 3)} {u['force']}"
        if r.horizontal_force:
            line += f", H={fmt_num(r.horizontal_force, 3)} {u['force']}"
        if r.moment:
            line += f", M={fmt_num(r.moment, 3)} {u['moment']}"
        click.echo(line)
    click.echo(
        f"|V|max = {fmt_num(abs(results.max_shear.value), 3)} {u['force']} "
        f"at x = {fmt_num(results.max_shear.position, 3)}"
    )
    click.echo(
        f"|M|max = {fmt_num(abs(results.max_moment.value), 3)} {u['moment']} "
        f"at x = {fmt_num(results.max_moment.position, 3)}"
    )

    if results.validation.is_valid:
        click.secho("Validation: OK", fg="green")
    else:
        click.secho("Validation: FAILED", fg="red")
        for msg in results.validation.messages:
            click.echo(f"  - {msg}")
    for w in results.warnings:
        click.secho(f"[{w.level}] {w.message}", fg="yellow" if w.level != "info" else None)


@main.command()
@click.argument("beam_json", type=click.Path(exists=True, dir_okay=False))
@click.option("--csv", "csv_dir", type=click.Path(file_okay=False), help="Write CSV tables to this directory.")
@click.option("--pdf", "pdf_path", type=click.Path(dir_okay=False), help="Write a PDF calculation report.")
@click.option("--json", "json_path", type=click.Path(dir_okay=False), help="Write the full results as JSON.")
@click.option("--steps", is_flag=True, help="Print the calculation steps.")
def analyze(beam_json: str, csv_dir: Optional[str], pdf_path: Optional[str],
            json_path: Optional[str], steps: bool) -> None:
    """Analyze the beam described in BEAM_JSON."""
    try:
        beam = load_beam_json(beam_json)
        results = analyze_beam(beam)
    except (ConfigurationError, SerializationError) as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc

    _print_summary(results, beam.units)

    if steps:
        for s in results.trace.steps:
            click.echo(f"\nStep {s.step_number}: {s.title}")
            for eq in s.equations:
                click.echo(f"  {eq}")
            if s.result:
                click.echo(f"  => {s.result}")

    if csv_dir:
        files = export_csv_files(results, csv_dir, beam.units)
        click.echo(f"CSV: {len(files)} file(s) in {csv_dir}")

    if json_path:
        save_results_json(results, json_path)
        click.echo(f"JSON: {json_path}")

    if pdf_path:
        with tempfile.TemporaryDirectory() as td:
            images = save_diagram_images(results, td, beam.units)
            export_analysis_pdf(
                pdf_path, beam, results,
                header=ReportHeader(project_name=Path(beam_json).stem),
                images=images,
            )
        click.echo(f"PDF: {pdf_path}")


@main.command()
@click.argument("template_id")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Save the template beam as JSON.")
def template(template_id: str, output: Optional[str]) -> None:
    """Analyze a built-in template (or save it with -o)."""
    t = get_template(template_id)
    if t is None:
        click.secho(f"Unknown template: {template_id}", fg="red", err=True)
        raise SystemExit(1)

    if output:
        save_beam_json(t.beam, output)
        click.echo(f"Saved {t.id} to {output}")
        return

    click.echo(f"{t.name} ({t.category})")
    click.echo(t.description)
    results = analyze_beam(t.beam)
    _print_summary(results, t.beam.units)
    if t.expected_max_moment is not None:
        click.echo(f"Expected |M|max ≈ {fmt_num(t.expected_max_moment, 3)}")


@main.command()
def templates() -> None:
    """List the built-in templates."""
    for cat in categories():
        click.secho(cat, bold=True)
        for t in templates_by_category(cat):
            click.echo(f"  {t.id:<18} {t.name}")
    click.echo(f"{len(TEMPLATES)} template(s)")


if __name__ == "__main__":
    main()
