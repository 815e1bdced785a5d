from __future__ import annotations

from typing import Dict

from beam_statics.domain.loads import MomentDirection

# Etiquetas de unidades por sistema (sólo presentación)
UNIT_LABELS: Dict[str, Dict[str, str]] = {
    "metric": {"force": "kN", "length": "m", "moment": "kN·m"},
    "imperial": {"force": "kips", "length": "ft", "moment": "kip·ft"},
}

MOMENT_SIGN_CONVENTION: Dict[str, float] = {
    "counterclockwise": +1.0,
    "clockwise": -1.0,
}


def unit_labels(units: str) -> Dict[str, str]:
    try:
        return UNIT_LABELS[units]
    except KeyError:
        raise ValueError(f"Sistema de unidades desconocido: {units!r}") from None


def force_unit(units: str) -> str:
    return unit_labels(units)["force"]


def length_unit(units: str) -> str:
    return unit_labels(units)["length"]


def moment_unit(units: str) -> str:
    return unit_labels(units)["moment"]


def signed_moment(magnitude: float, direction: MomentDirection) -> float:
    """
    Convierte (magnitud, sentido) a momento interno con CCW positivo.
    """
    try:
        sign = MOMENT_SIGN_CONVENTION[direction]
    except KeyError:
        raise ValueError(f"Sentido de momento desconocido: {direction!r}") from None
    return sign * float(magnitude)


def fmt_num(v: float, decimals: int = 2) -> str:
    """Formato fijo con recorte de ceros (2.50 -> 2.5, 3.00 -> 3)."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in ("-0", ""):
        s = "0"
    return s
