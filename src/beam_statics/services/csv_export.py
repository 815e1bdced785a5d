from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, Sequence

import pandas as pd

from beam_statics.domain.labels import unit_labels
from beam_statics.domain.results import AnalysisResults, CriticalPoint, DiagramPoint, Reaction

logger = logging.getLogger(__name__)


def diagram_frame(points: Sequence[DiagramPoint], value_header: str, length_unit: str) -> pd.DataFrame:
    return pd.DataFrame(
        {
            f"Position ({length_unit})": [p.position for p in points],
            value_header: [p.value for p in points],
        }
    )


def reactions_frame(reactions: Sequence[Reaction], units: str) -> pd.DataFrame:
    u = unit_labels(units)
    return pd.DataFrame(
        {
            "Support": [r.support_id for r in reactions],
            f"Position ({u['length']})": [r.position for r in reactions],
            f"Vertical Force ({u['force']})": [r.vertical_force for r in reactions],
            f"Horizontal Force ({u['force']})": [r.horizontal_force for r in reactions],
            f"Moment ({u['moment']})": [r.moment for r in reactions],
        }
    )


def critical_points_frame(points: Sequence[CriticalPoint], units: str) -> pd.DataFrame:
    u = unit_labels(units)
    return pd.DataFrame(
        {
            f"Position ({u['length']})": [p.position for p in points],
            "Description": [p.description for p in points],
            "Type": [p.type for p in points],
            f"Shear Force ({u['force']})": [p.shear for p in points],
            f"Bending Moment ({u['moment']})": [p.moment for p in points],
            "Discontinuity": [p.is_discontinuity for p in points],
        }
    )


def analysis_frames(results: AnalysisResults, units: str = "metric") -> Dict[str, pd.DataFrame]:
    """Un DataFrame por tabla exportable (clave = nombre de archivo)."""
    u = unit_labels(units)
    return {
        "support_reactions.csv": reactions_frame(results.reactions, units),
        "critical_points.csv": critical_points_frame(results.critical_points.points, units),
        "shear_force_diagram.csv": diagram_frame(
            results.shear_force, f"Shear Force ({u['force']})", u["length"]
        ),
        "bending_moment_diagram.csv": diagram_frame(
            results.bending_moment, f"Bending Moment ({u['moment']})", u["length"]
        ),
    }


def export_csv_files(results: AnalysisResults, out_dir: str | Path, units: str = "metric") -> Dict[str, Path]:
    """Escribe los cuatro CSV en out_dir; devuelve {nombre: path}."""
    d = Path(out_dir)
    d.mkdir(parents=True, exist_ok=True)
    out: Dict[str, Path] = {}
    for fname, df in analysis_frames(results, units).items():
        path = d / fname
        df.to_csv(path, index=False)
        out[fname] = path
    logger.info("CSV exportados en %s (%d archivos)", d, len(out))
    return out


SECTION_TITLES = {
    "support_reactions.csv": "SUPPORT REACTIONS",
    "critical_points.csv": "CRITICAL POINTS",
    "shear_force_diagram.csv": "SHEAR FORCE DIAGRAM",
    "bending_moment_diagram.csv": "BENDING MOMENT DIAGRAM",
}


def combined_csv_text(results: AnalysisResults, units: str = "metric") -> str:
    """Todas las tablas en un único texto CSV, separadas por título y línea en blanco."""
    buf = io.StringIO()
    frames = analysis_frames(results, units)
    for k, (fname, df) in enumerate(frames.items()):
        if k:
            buf.write("\n")
        buf.write(SECTION_TITLES[fname] + "\n")
        df.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()


def export_combined_csv(results: AnalysisResults, path: str | Path, units: str = "metric") -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(combined_csv_text(results, units), encoding="utf-8")
    return p
