from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List

from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.checks import (
    ClosureItem, DiagramClosureCheck, EquilibriumCheck,
    RelationshipCheck, RelationshipStats, ValidationReport,
)
from beam_statics.domain.loads import DistributedLoad, Load, MomentLoad, PointLoad
from beam_statics.domain.results import (
    AnalysisResults, CalculationStep, CalculationTrace, CriticalPoint,
    CriticalPointsAnalysis, DiagramPoint, EngineeringWarning, Extremum, Reaction,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


class SerializationError(ValueError):
    """Datos guardados con formato inválido."""


# -------------------------
# Beam
# -------------------------
def load_to_dict(load: Load) -> Dict[str, Any]:
    if isinstance(load, PointLoad):
        return {"id": load.id, "type": "point", "position": load.position,
                "magnitude": load.magnitude, "angle": load.angle}
    if isinstance(load, DistributedLoad):
        return {"id": load.id, "type": "distributed",
                "start_position": load.start_position, "end_position": load.end_position,
                "start_magnitude": load.start_magnitude, "end_magnitude": load.end_magnitude}
    if isinstance(load, MomentLoad):
        return {"id": load.id, "type": "moment", "position": load.position,
                "magnitude": load.magnitude, "direction": load.direction}
    raise SerializationError(f"Tipo de carga no serializable: {type(load).__name__}")


def load_from_dict(d: Dict[str, Any]) -> Load:
    try:
        kind = d["type"]
        if kind == "point":
            return PointLoad(id=str(d["id"]), position=float(d["position"]),
                             magnitude=float(d["magnitude"]), angle=float(d.get("angle", 0.0)))
        if kind == "distributed":
            return DistributedLoad(
                id=str(d["id"]),
                start_position=float(d["start_position"]),
                end_position=float(d["end_position"]),
                start_magnitude=float(d["start_magnitude"]),
                end_magnitude=float(d.get("end_magnitude", d["start_magnitude"])),
            )
        if kind == "moment":
            return MomentLoad(id=str(d["id"]), position=float(d["position"]),
                              magnitude=float(d["magnitude"]), direction=d["direction"])
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"Carga inválida {d!r}: {e}") from e
    raise SerializationError(f"Tipo de carga desconocido: {kind!r}")


def beam_to_dict(beam: Beam) -> Dict[str, Any]:
    return {
        "schema": SCHEMA_VERSION,
        "id": beam.id,
        "length": beam.length,
        "units": beam.units,
        "supports": [asdict(s) for s in beam.supports],
        "loads": [load_to_dict(ld) for ld in beam.loads],
    }


def beam_from_dict(d: Dict[str, Any]) -> Beam:
    if not isinstance(d, dict):
        raise SerializationError(f"Viga inválida: se esperaba un objeto, no {type(d).__name__}")
    try:
        supports = [
            Support(id=str(s["id"]), position=float(s["position"]), type=s["type"])
            for s in d.get("supports", [])
        ]
        return Beam(
            length=float(d["length"]),
            supports=supports,
            loads=[load_from_dict(ld) for ld in d.get("loads", [])],
            units=d.get("units", "metric"),
            id=str(d.get("id", "beam-1")),
        )
    except (KeyError, TypeError, ValueError) as e:
        if isinstance(e, SerializationError):
            raise
        raise SerializationError(f"Viga inválida: {e}") from e


def save_beam_json(beam: Beam, path: str | Path) -> None:
    _write_json(path, beam_to_dict(beam))


def load_beam_json(path: str | Path) -> Beam:
    return beam_from_dict(_read_json(path))


# -------------------------
# Resultados
# -------------------------
def results_to_dict(results: AnalysisResults) -> Dict[str, Any]:
    out = asdict(results)
    v = results.validation
    out["validation"]["is_valid"] = v.is_valid
    out["validation"]["messages"] = v.messages
    out["schema"] = SCHEMA_VERSION
    return out


def _points(items: List[Dict[str, Any]]) -> List[DiagramPoint]:
    return [DiagramPoint(**p) for p in items]


def _critical(d: Any) -> Any:
    return None if d is None else CriticalPoint(**d)


def results_from_dict(d: Dict[str, Any]) -> AnalysisResults:
    try:
        v = d["validation"]
        eq = EquilibriumCheck(**v["equilibrium"])
        cl = v["diagram_closure"]
        closure = DiagramClosureCheck(
            shear_closure=[ClosureItem(**c) for c in cl["shear_closure"]],
            moment_closure=[ClosureItem(**c) for c in cl["moment_closure"]],
            is_valid=cl["is_valid"],
            messages=list(cl["messages"]),
        )
        rl = v["relationships"]
        rel = RelationshipCheck(
            dMdx_equals_V=RelationshipStats(**rl["dMdx_equals_V"]),
            dVdx_equals_negW=RelationshipStats(**rl["dVdx_equals_negW"]),
            tolerance=rl["tolerance"],
            is_valid=rl["is_valid"],
            messages=list(rl["messages"]),
        )
        cp = d["critical_points"]
        tr = d["trace"]
        return AnalysisResults(
            reactions=[Reaction(**r) for r in d["reactions"]],
            shear_force=_points(d["shear_force"]),
            bending_moment=_points(d["bending_moment"]),
            max_shear=Extremum(**d["max_shear"]),
            max_moment=Extremum(**d["max_moment"]),
            validation=ValidationReport(equilibrium=eq, diagram_closure=closure, relationships=rel),
            critical_points=CriticalPointsAnalysis(
                points=[CriticalPoint(**p) for p in cp["points"]],
                max_positive_moment=_critical(cp.get("max_positive_moment")),
                max_negative_moment=_critical(cp.get("max_negative_moment")),
                max_positive_shear=_critical(cp.get("max_positive_shear")),
                max_negative_shear=_critical(cp.get("max_negative_shear")),
            ),
            trace=CalculationTrace(
                steps=[CalculationStep(**s) for s in tr["steps"]],
                summary=tr["summary"],
            ),
            warnings=[EngineeringWarning(**w) for w in d.get("warnings", [])],
        )
    except (KeyError, TypeError) as e:
        raise SerializationError(f"Resultados inválidos: {e}") from e


def save_results_json(results: AnalysisResults, path: str | Path) -> None:
    _write_json(path, results_to_dict(results))


# -------------------------
# helpers
# -------------------------
def _write_json(path: str | Path, data: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("JSON escrito: %s", p)


def _read_json(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"No existe el archivo: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SerializationError(f"JSON inválido en {p}: {e}") from e
    if not isinstance(data, dict):
        raise SerializationError(f"Se esperaba un objeto JSON en {p}")
    return data
