from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from beam_statics.domain.beam import Beam, Support
from beam_statics.domain.loads import DistributedLoad, PointLoad


@dataclass(frozen=True)
class BeamTemplate:
    id: str
    name: str
    description: str
    category: str              # "Simply Supported" | "Cantilever"
    beam: Beam
    expected_max_moment: Optional[float] = None   # |M| máximo teórico
    expected_max_shear: Optional[float] = None    # |V| máximo teórico


def _ss(length: float, *loads) -> Beam:
    return Beam(
        length=length,
        supports=[Support("s1", 0.0, "pin"), Support("s2", length, "roller")],
        loads=list(loads),
    )


def _cant(length: float, *loads) -> Beam:
    return Beam(length=length, supports=[Support("s1", 0.0, "fixed")], loads=list(loads))


TEMPLATES: List[BeamTemplate] = [
    # Simplemente apoyadas
    BeamTemplate(
        "ss-central-point", "Central Point Load",
        "Simply supported beam with single centered point load - most common case",
        "Simply Supported", _ss(10, PointLoad("l1", 5, 20)), 50, 10,
    ),
    BeamTemplate(
        "ss-udl", "Uniformly Distributed Load",
        "Simply supported beam with uniform distributed load across entire span",
        "Simply Supported", _ss(10, DistributedLoad("l1", 0, 10, 5, 5)), 62.5, 25,
    ),
    BeamTemplate(
        "ss-three-point", "Three-Point Loading",
        "Simply supported beam with two symmetrical point loads",
        "Simply Supported", _ss(12, PointLoad("l1", 4, 15), PointLoad("l2", 8, 15)), 60, 15,
    ),
    BeamTemplate(
        "ss-combined", "Combined Loading",
        "Simply supported beam with both point load and distributed load",
        "Simply Supported",
        _ss(10, DistributedLoad("l1", 0, 10, 3, 3), PointLoad("l2", 5, 10)), 62.5, 20,
    ),
    BeamTemplate(
        "ss-offset-point", "Offset Point Load",
        "Simply supported beam with off-center point load",
        "Simply Supported", _ss(10, PointLoad("l1", 3, 20)), 42, 14,
    ),
    BeamTemplate(
        "ss-partial-udl", "Partial Distributed Load",
        "Simply supported beam with distributed load over part of span",
        "Simply Supported", _ss(10, DistributedLoad("l1", 2, 8, 4, 4)), 42, 12,
    ),
    # Ménsulas (empotradas en x=0)
    BeamTemplate(
        "cant-end-point", "End Point Load",
        "Cantilever beam with point load at free end",
        "Cantilever", _cant(8, PointLoad("l1", 8, 15)), 120, 15,
    ),
    BeamTemplate(
        "cant-udl", "Uniformly Distributed Load",
        "Cantilever beam with uniform distributed load across entire span",
        "Cantilever", _cant(8, DistributedLoad("l1", 0, 8, 5, 5)), 160, 40,
    ),
    BeamTemplate(
        "cant-mid-point", "Mid-Span Point Load",
        "Cantilever beam with point load at middle of span",
        "Cantilever", _cant(8, PointLoad("l1", 4, 15)), 60, 15,
    ),
    BeamTemplate(
        "cant-combined", "Combined Loading",
        "Cantilever beam with both point load and distributed load",
        "Cantilever",
        _cant(8, DistributedLoad("l1", 0, 8, 3, 3), PointLoad("l2", 8, 10)), 176, 34,
    ),
]


def get_template(template_id: str) -> Optional[BeamTemplate]:
    for t in TEMPLATES:
        if t.id == template_id:
            return t
    return None


def templates_by_category(category: str) -> List[BeamTemplate]:
    return [t for t in TEMPLATES if t.category == category]


def categories() -> List[str]:
    seen: List[str] = []
    for t in TEMPLATES:
        if t.category not in seen:
            seen.append(t.category)
    return seen
