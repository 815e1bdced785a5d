# path: src/beam_statics/services/report_pdf.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from beam_statics.domain.beam import Beam
from beam_statics.domain.labels import fmt_num, unit_labels
from beam_statics.domain.results import AnalysisResults

logger = logging.getLogger(__name__)

# Nota: este módulo no dibuja. Acepta paths a imágenes ya generadas
# (view.renderer_vm.save_diagram_images) y los resultados del motor.


@dataclass(frozen=True)
class ReportHeader:
    project_name: str = "Beam Analysis"
    project_number: str = ""
    engineer: str = ""
    company: str = ""
    checked: str = ""
    date: Optional[datetime] = None
    revision: str = "A"


@dataclass(frozen=True)
class ReportOptions:
    include_configuration: bool = True
    include_calculation_steps: bool = True
    include_diagrams: bool = True
    include_critical_points: bool = True
    include_validation: bool = True
    paper_size: str = "letter"          # "a4" | "letter"
    orientation: str = "portrait"       # "portrait" | "landscape"


def _page_size(opts: ReportOptions):
    size = pagesizes.A4 if opts.paper_size.lower() == "a4" else pagesizes.letter
    return pagesizes.landscape(size) if opts.orientation == "landscape" else pagesizes.portrait(size)


def export_analysis_pdf(
    out_pdf_path: str,
    beam: Beam,
    results: AnalysisResults,
    header: Optional[ReportHeader] = None,
    options: Optional[ReportOptions] = None,
    images: Optional[Dict[str, str]] = None,
) -> None:
    """
    Memoria de cálculo en PDF: configuración, pasos de cálculo, reacciones,
    puntos críticos, verificaciones y figuras.
    """
    header = header or ReportHeader()
    opts = options or ReportOptions()
    imgs = _normalize_images_dict(images)
    u = unit_labels(beam.units)

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))
    styles.add(ParagraphStyle(name="MonoSmall", parent=styles["BodyText"], fontName="Courier", fontSize=8, leading=10))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=_page_size(opts),
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.project_name,
    )
    frame_w = doc.width

    story: List[object] = []

    # ----------------- Portada -----------------
    story.append(Paragraph(escape(header.project_name), styles["H1c"]))
    story.append(Spacer(1, 4 * mm))

    date = header.date or datetime.now()
    meta_rows = [
        ["Project number:", header.project_number or "-"],
        ["Engineer:", header.engineer or "-"],
        ["Checked:", header.checked or "-"],
        ["Company:", header.company or "-"],
        ["Date:", date.strftime("%Y-%m-%d %H:%M")],
        ["Revision:", header.revision],
    ]
    t = Table(meta_rows, colWidths=[40 * mm, frame_w - 40 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 6 * mm))

    # ----------------- Configuración -----------------
    if opts.include_configuration:
        story.append(Paragraph("Beam configuration", styles["Heading2"]))
        dims = [
            [f"Length [{u['length']}]", fmt_num(beam.length, 3)],
            ["Units", beam.units],
            ["Type", "Cantilever" if beam.is_cantilever else "Simply supported"],
        ]
        t = Table(dims, colWidths=[55 * mm, frame_w - 55 * mm])
        t.setStyle(_kv_table_style())
        story.append(t)
        story.append(Spacer(1, 3 * mm))

        srows = [["Support", "Type", f"x [{u['length']}]"]]
        srows += [[s.id, s.type, fmt_num(s.position, 3)] for s in beam.supports]
        story.append(_grid(srows, frame_w))
        story.append(Spacer(1, 3 * mm))

        story.append(Paragraph("Applied loads", styles["Heading3"]))
        story.append(_grid([["Load", "Detail"]] + [[ld.id, _load_detail(ld, u)] for ld in beam.loads], frame_w))
        story.append(Spacer(1, 4 * mm))

    # ----------------- Reacciones -----------------
    story.append(Paragraph("Support reactions", styles["Heading2"]))
    rrows = [["Support", f"x [{u['length']}]", f"V [{u['force']}]", f"H [{u['force']}]", f"M [{u['moment']}]"]]
    for r in results.reactions:
        rrows.append([r.support_id, _f(r.position, 3), _f(r.vertical_force, 3),
                      _f(r.horizontal_force, 3), _f(r.moment, 3)])
    story.append(_grid(rrows, frame_w))
    story.append(Spacer(1, 2 * mm))
    story.append(Paragraph(
        f"|V|max = {_f(abs(results.max_shear.value), 3)} {u['force']} at x = {_f(results.max_shear.position, 3)}; "
        f"|M|max = {_f(abs(results.max_moment.value), 3)} {u['moment']} at x = {_f(results.max_moment.position, 3)}",
        styles["Small"],
    ))
    story.append(Spacer(1, 4 * mm))

    # ----------------- Pasos de cálculo -----------------
    if opts.include_calculation_steps and results.trace.steps:
        story.append(PageBreak())
        story.append(Paragraph("Calculation steps", styles["Heading2"]))
        for step in results.trace.steps:
            story.append(Paragraph(f"Step {step.step_number}: {escape(step.title)}", styles["Heading3"]))
            story.append(Paragraph(escape(step.description), styles["BodyText"]))
            story.extend(_mono_block(step.equations, styles))
            if step.result:
                story.append(Paragraph(f"<b>Result:</b> {escape(step.result)}", styles["BodyText"]))
            story.append(Spacer(1, 3 * mm))
        story.append(Paragraph(escape(results.trace.summary), styles["Small"]))

    # ----------------- Puntos críticos -----------------
    if opts.include_critical_points and results.critical_points.points:
        story.append(Paragraph("Critical points", styles["Heading2"]))
        rows = [[f"x [{u['length']}]", "Description", f"V [{u['force']}]", f"M [{u['moment']}]"]]
        for p in results.critical_points.points:
            rows.append([_f(p.position, 3), p.description + (" *" if p.is_discontinuity else ""),
                         _f(p.shear, 3), _f(p.moment, 3)])
        story.append(_grid(rows, frame_w, font_size=8))
        story.append(Paragraph("* discontinuity", styles["Small"]))
        story.append(Spacer(1, 4 * mm))

    # ----------------- Verificaciones -----------------
    if opts.include_validation:
        v = results.validation
        story.append(Paragraph("Validation", styles["Heading2"]))
        rel = v.relationships
        vrows = [
            ["Equilibrium (ΣFy, ΣFx, ΣM)", _ok(v.equilibrium.is_valid)],
            ["Diagram closure (M = 0 at pin/roller)", _ok(v.diagram_closure.is_valid)],
            [f"dM/dx = V (max error {rel.dMdx_equals_V.max_error * 100:.3f} %)", _ok(rel.dMdx_equals_V.is_valid)],
            [f"dV/dx = -w (max error {rel.dVdx_equals_negW.max_error * 100:.3f} %)", _ok(rel.dVdx_equals_negW.is_valid)],
        ]
        t = Table(vrows, colWidths=[frame_w - 30 * mm, 30 * mm])
        t.setStyle(_kv_table_style())
        story.append(t)
        for msg in v.messages:
            story.append(Paragraph(f"• {escape(msg)}", styles["Small"]))
        for w in results.warnings:
            story.append(Paragraph(f"[{w.level}] {escape(w.message)}", styles["Small"]))
        story.append(Spacer(1, 4 * mm))

    # ----------------- Figuras -----------------
    if opts.include_diagrams:
        story.append(PageBreak())
        story.append(Paragraph("Diagrams", styles["Heading2"]))
        _append_figure(story, styles, "v", "Shear force diagram V(x)", imgs, max_w=frame_w, max_h=95 * mm)
        _append_figure(story, styles, "m", "Bending moment diagram M(x)", imgs, max_w=frame_w, max_h=95 * mm)

    doc.build(story)
    logger.info("PDF generado: %s", out_pdf_path)


# ----------------- helpers -----------------

def _load_detail(ld, u: Dict[str, str]) -> str:
    if ld.type == "point":
        ang = f", angle {fmt_num(ld.angle)}°" if ld.angle else ""
        return f"P = {fmt_num(ld.magnitude, 3)} {u['force']} at x = {fmt_num(ld.position, 3)}{ang}"
    if ld.type == "distributed":
        return (f"w = {fmt_num(ld.start_magnitude, 3)} → {fmt_num(ld.end_magnitude, 3)} "
                f"{u['force']}/{u['length']} on [{fmt_num(ld.start_position, 3)}, {fmt_num(ld.end_position, 3)}]")
    return f"M = {fmt_num(ld.magnitude, 3)} {u['moment']} {ld.direction} at x = {fmt_num(ld.position, 3)}"


def _ok(flag: bool) -> str:
    return "OK" if flag else "FAIL"


def _normalize_images_dict(images: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not images:
        return {}
    out: Dict[str, str] = {}
    for k, v in images.items():
        kk = (k or "").strip().lower()
        vv = (v or "").strip()
        if kk and vv:
            out[kk] = vv
    return out


def _append_figure(story: List[object], styles, key: str, title: str, imgs: Dict[str, str], *, max_w: float, max_h: float):
    story.append(Paragraph(title, styles["Heading3"]))
    path = (imgs.get(key) or "").strip()
    if path and os.path.exists(path):
        story.append(_img(path, max_w=max_w, max_h=max_h))
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        story.append(Paragraph(f"(No image: '{key}' not available)", styles["Small"]))
    story.append(Spacer(1, 3 * mm))


def _f(v: float, dec: int) -> str:
    return fmt_num(v, dec)


def _mono_block(lines: List[str], styles):
    out: List[object] = []
    for ln in lines:
        out.append(Paragraph(escape(ln).replace(" ", "&nbsp;") or "&nbsp;", styles["MonoSmall"]))
    return out


def _grid(rows: List[List[str]], width: float, font_size: int = 9) -> Table:
    t = Table(rows, repeatRows=1, colWidths=[width / len(rows[0])] * len(rows[0]))
    t.setStyle(_grid_table_style(header_rows=1, font_size=font_size))
    return t


def _kv_table_style():
    return TableStyle(
        [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
    )


def _grid_table_style(header_rows: int = 1, font_size: int = 9):
    ts = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if header_rows > 0:
        ts += [
            ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ]
    return TableStyle(ts)


def _img(path: str, *, max_w: float, max_h: float):
    img = Image(path)
    iw, ih = img.imageWidth, img.imageHeight
    if iw <= 0 or ih <= 0:
        return img
    scale = min(max_w / iw, max_h / ih, 1.0)
    img.drawWidth = iw * scale
    img.drawHeight = ih * scale
    return img
