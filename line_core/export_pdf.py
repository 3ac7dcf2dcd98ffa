# line_core/export_pdf.py
from __future__ import annotations
from typing import Iterable, List
import io
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib import colors
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from .models import HistoryEntry, Player

def played_lines_rows(history: Iterable[HistoryEntry], players: Iterable[Player], team_names=None) -> List[List[str]]:
    lookup = {p.id: p for p in players}
    team_names = team_names or {1: "Team 1", 2: "Team 2"}
    rows = [["Point", "Scored by", "Line"]]
    for e in history:
        names = []
        for pid in e.line:
            p = lookup.get(pid)
            names.append(f"#{p.number} {p.name}" if p else pid)
        rows.append([str(e.point_number), team_names.get(e.team, str(e.team)), ", ".join(names)])
    return rows

def render_lines_pdf(title: str, rows: List[List[str]]) -> bytes:
    buf = io.BytesIO()
    page_size = landscape(letter)
    c = canvas.Canvas(buf, pagesize=page_size)

    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, page_size[1] - 40, title)

    t = Table(rows, repeatRows=1, colWidths=[50, 110, page_size[0] - 80 - 160])
    t.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.lightgrey),
        ("TEXTCOLOR", (0,0), (-1,0), colors.black),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,-1), 9),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
        ("ALIGN", (0,0), (-1,-1), "LEFT"),
        ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
    ]))

    table_w, table_h = t.wrapOn(c, page_size[0] - 80, page_size[1] - 100)
    x = 40
    y = page_size[1] - 80 - table_h
    t.drawOn(c, x, y)

    c.showPage()
    c.save()
    return buf.getvalue()
