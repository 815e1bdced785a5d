from __future__ import annotations

from typing import List, Sequence, Tuple

from beam_statics.domain.beam import Beam
from beam_statics.domain.labels import fmt_num, force_unit, length_unit, moment_unit
from beam_statics.domain.results import CalculationStep, CalculationTrace, Reaction
from beam_statics.engine.normalize import point_components
from beam_statics.engine.validation import validate_equilibrium


def _f(v: float) -> str:
    return f"{float(v):.2f}"


def generate_trace(beam: Beam, reactions: Sequence[Reaction]) -> CalculationTrace:
    """
    Memoria paso a paso de las reacciones ya calculadas por el solver.
    Los valores de reacción se toman de `reactions`; nunca se recalculan aquí.
    """
    if len(beam.supports) == 2 and len(reactions) == 2:
        return _simply_supported_steps(beam, reactions)
    if len(beam.supports) == 1 and beam.supports[0].type == "fixed" and len(reactions) == 1:
        return _cantilever_steps(beam, reactions)
    return CalculationTrace(steps=[], summary="Unknown beam configuration")


def _load_lines(beam: Beam) -> List[str]:
    fu, lu, mu = force_unit(beam.units), length_unit(beam.units), moment_unit(beam.units)
    out: List[str] = []
    for idx, ld in enumerate(beam.loads, start=1):
        if ld.type == "point":
            angle = f" at {fmt_num(ld.angle)}°" if ld.angle else ""
            out.append(
                f"Load {idx}: Point load P = {fmt_num(ld.magnitude)} {fu}{angle} "
                f"at x = {fmt_num(ld.position)} {lu}"
            )
        elif ld.type == "distributed":
            if ld.start_position == ld.end_position:
                out.append(
                    f"Load {idx}: Concentrated load P = {fmt_num(ld.start_magnitude)} {fu} "
                    f"at x = {fmt_num(ld.start_position)} {lu} (zero-length distributed load)"
                )
            elif ld.start_magnitude == ld.end_magnitude:
                out.append(
                    f"Load {idx}: Uniform distributed load w = {fmt_num(ld.start_magnitude)} {fu}/{lu} "
                    f"from x = {fmt_num(ld.start_position)} to {fmt_num(ld.end_position)} {lu}"
                )
            else:
                out.append(
                    f"Load {idx}: Varying distributed load w = {fmt_num(ld.start_magnitude)} to "
                    f"{fmt_num(ld.end_magnitude)} {fu}/{lu} "
                    f"from x = {fmt_num(ld.start_position)} to {fmt_num(ld.end_position)} {lu}"
                )
        elif ld.type == "moment":
            out.append(
                f"Load {idx}: Applied moment M = {fmt_num(ld.magnitude)} {mu} {ld.direction} "
                f"at x = {fmt_num(ld.position)} {lu}"
            )
    return out or ["No applied loads"]


def _load_terms(beam: Beam, x_ref: float) -> Tuple[List[str], List[str], float, float]:
    """
    Líneas de ΣM respecto a x_ref y de ΣFy por carga, con sus totales.
    Sólo cargas: las reacciones vienen del solver.
    """
    fu, lu, mu = force_unit(beam.units), length_unit(beam.units), moment_unit(beam.units)
    m_lines: List[str] = []
    f_lines: List[str] = []
    M_total = 0.0
    F_total = 0.0
    xr = _f(x_ref)

    for idx, ld in enumerate(beam.loads, start=1):
        if ld.type == "point":
            fv, _ = point_components(ld.magnitude, ld.angle)
            m = fv * (ld.position - x_ref)
            M_total += m
            F_total += fv
            m_lines.append(f"  • Load {idx}: {_f(fv)} × ({_f(ld.position)} - {xr}) = {_f(m)} {mu}")
            f_lines.append(f"  • Load {idx}: {_f(fv)} {fu} (downward)")
        elif ld.type == "distributed":
            length = ld.end_position - ld.start_position
            if length > 0:
                avg = 0.5 * (ld.start_magnitude + ld.end_magnitude)
                total = avg * length
                a, b = ld.start_position, ld.end_position
                first = length * (ld.start_magnitude * (2 * a + b) + ld.end_magnitude * (a + 2 * b)) / 6.0
                m = first - total * x_ref
                centroid = first / total if total else 0.5 * (a + b)
                M_total += m
                F_total += total
                m_lines.append(
                    f"  • Load {idx}: {_f(avg)} × {_f(length)} × ({_f(centroid)} - {xr}) = {_f(m)} {mu}"
                )
                f_lines.append(f"  • Load {idx}: {_f(avg)} × {_f(length)} = {_f(total)} {fu} (downward)")
            else:
                m = ld.start_magnitude * (ld.start_position - x_ref)
                M_total += m
                F_total += ld.start_magnitude
                m_lines.append(
                    f"  • Load {idx}: {_f(ld.start_magnitude)} × ({_f(ld.start_position)} - {xr}) = {_f(m)} {mu}"
                )
                f_lines.append(f"  • Load {idx}: {_f(ld.start_magnitude)} {fu} (downward)")
        elif ld.type == "moment":
            m = -ld.magnitude if ld.direction == "clockwise" else ld.magnitude
            M_total += m
            m_lines.append(f"  • Load {idx}: {'+' if m > 0 else ''}{_f(m)} {mu} ({ld.direction})")

    return m_lines, f_lines, M_total, F_total


def _check_step(beam: Beam, reactions: Sequence[Reaction], step_number: int) -> CalculationStep:
    fu, mu = force_unit(beam.units), moment_unit(beam.units)
    eq = validate_equilibrium(beam, reactions)
    lines = [
        f"ΣF_y = {eq.sum_vertical_forces:.6f} {fu} {'(OK)' if eq.is_vertical_equilibrium else '(FAIL)'}",
        f"ΣF_x = {eq.sum_horizontal_forces:.6f} {fu} {'(OK)' if eq.is_horizontal_equilibrium else '(FAIL)'}",
        f"ΣM_0 = {eq.sum_moments_about_origin:.6f} {mu} {'(OK)' if eq.is_moment_equilibrium else '(FAIL)'}",
    ]
    if eq.messages:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  ⚠ {m}" for m in eq.messages)
    return CalculationStep(
        step_number=step_number,
        title="Equilibrium Check",
        description="Verify that equilibrium equations are satisfied",
        equations=lines,
        result="All checks passed ✓" if eq.is_valid else "Equilibrium violated ✗",
    )


def _simply_supported_steps(beam: Beam, reactions: Sequence[Reaction]) -> CalculationTrace:
    s1, s2 = beam.supports
    r1, r2 = reactions
    fu, lu, mu = force_unit(beam.units), length_unit(beam.units), moment_unit(beam.units)
    steps: List[CalculationStep] = []

    steps.append(CalculationStep(
        step_number=1,
        title="Free Body Diagram",
        description=(
            f"Simply supported beam with {s1.type} at x={fmt_num(s1.position)}{lu} "
            f"and {s2.type} at x={fmt_num(s2.position)}{lu}"
        ),
        equations=[
            f"Beam length: L = {fmt_num(beam.length)} {lu}",
            f"Support A: {s1.type} at x = {fmt_num(s1.position)} {lu}",
            f"Support B: {s2.type} at x = {fmt_num(s2.position)} {lu}",
        ],
    ))

    steps.append(CalculationStep(
        step_number=2,
        title="Applied Loads",
        description="List of all applied loads on the beam",
        equations=_load_lines(beam),
    ))

    m_lines, f_lines, M_loads, F_loads = _load_terms(beam, float(s1.position))
    d = float(s2.position) - float(s1.position)

    steps.append(CalculationStep(
        step_number=3,
        title=f"Sum Moments about Support A (x={fmt_num(s1.position)}{lu})",
        description="Calculate reaction at support B using moment equilibrium",
        equations=[
            "ΣM_A = 0 (equilibrium equation)",
            "",
            "Moments from loads:",
            *m_lines,
            "",
            "Moments from reactions:",
            f"  • Reaction at B: R_B × {_f(d)} {lu}",
            "",
            f"Equation: R_B × {_f(d)} - {_f(M_loads)} = 0",
            f"Solving: R_B = {_f(M_loads)} / {_f(d)} = {_f(r2.vertical_force)} {fu} ↑",
        ],
        result=f"R_B = {_f(r2.vertical_force)} {fu}",
    ))

    steps.append(CalculationStep(
        step_number=4,
        title="Sum Vertical Forces",
        description="Calculate reaction at support A using force equilibrium",
        equations=[
            "ΣF_y = 0 (equilibrium equation)",
            "",
            "Applied loads:",
            *(f_lines or ["  • none"]),
            "",
            "Reactions:",
            "  • R_A + R_B",
            "",
            f"Equation: R_A + {_f(r2.vertical_force)} - {_f(F_loads)} = 0",
            f"Solving: R_A = {_f(F_loads)} - {_f(r2.vertical_force)} = {_f(r1.vertical_force)} {fu} ↑",
        ],
        result=f"R_A = {_f(r1.vertical_force)} {fu}",
    ))

    steps.append(_check_step(beam, reactions, 5))

    summary = (
        "Reactions calculated for simply supported beam: "
        f"R_A = {_f(r1.vertical_force)} {fu}, R_B = {_f(r2.vertical_force)} {fu}"
    )
    return CalculationTrace(steps=steps, summary=summary)


def _cantilever_steps(beam: Beam, reactions: Sequence[Reaction]) -> CalculationTrace:
    support = beam.supports[0]
    r = reactions[0]
    fu, lu, mu = force_unit(beam.units), length_unit(beam.units), moment_unit(beam.units)
    xs = float(support.position)
    steps: List[CalculationStep] = []

    L = float(beam.length)
    if xs <= 1e-9:
        free_end = f"Free end at x = {fmt_num(L)} {lu}"
    elif xs >= L - 1e-9:
        free_end = f"Free end at x = 0 {lu}"
    else:
        # muro intermedio: dos voladizos
        free_end = f"Free ends at x = 0 {lu} and x = {fmt_num(L)} {lu}"
    steps.append(CalculationStep(
        step_number=1,
        title="Free Body Diagram",
        description=f"Cantilever beam with fixed support at x={fmt_num(xs)}{lu}",
        equations=[
            f"Beam length: L = {fmt_num(beam.length)} {lu}",
            f"Fixed support at x = {fmt_num(xs)} {lu}",
            free_end,
            "Unknowns: R_y, R_x, M_R (vertical, horizontal and moment reaction)",
        ],
    ))

    steps.append(CalculationStep(
        step_number=2,
        title="Applied Loads",
        description="List of all applied loads on the beam",
        equations=_load_lines(beam),
    ))

    m_lines, f_lines, M0, F_loads = _load_terms(beam, 0.0)

    steps.append(CalculationStep(
        step_number=3,
        title="Sum Moments about Origin (x=0)",
        description="Calculate the fixed-end moment using moment equilibrium",
        equations=[
            "ΣM_0 = 0 (equilibrium equation)",
            "",
            "Moments from loads:",
            *m_lines,
            "",
            f"Moments from reactions: M_R + R_y × {_f(xs)}",
            "",
            f"Equation: M_R + R_y × {_f(xs)} - {_f(M0)} = 0",
            f"Solving: M_R = {_f(M0)} - {_f(r.vertical_force)} × {_f(xs)} = {_f(r.moment)} {mu}",
        ],
        result=f"M_R = {_f(r.moment)} {mu}",
    ))

    steps.append(CalculationStep(
        step_number=4,
        title="Sum Forces",
        description="Calculate the vertical and horizontal reactions using force equilibrium",
        equations=[
            "ΣF_y = 0 (equilibrium equation)",
            "",
            "Applied loads:",
            *(f_lines or ["  • none"]),
            "",
            f"Equation: R_y - {_f(F_loads)} = 0",
            f"Solving: R_y = {_f(r.vertical_force)} {fu} ↑",
            f"ΣF_x = 0: R_x = {_f(r.horizontal_force)} {fu}",
        ],
        result=f"R_y = {_f(r.vertical_force)} {fu}, R_x = {_f(r.horizontal_force)} {fu}",
    ))

    steps.append(_check_step(beam, reactions, 5))

    summary = (
        "Cantilever beam reactions: "
        f"R_y = {_f(r.vertical_force)} {fu}, M = {_f(r.moment)} {mu}"
    )
    return CalculationTrace(steps=steps, summary=summary)
