import io
from typing import Optional
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib import colors
from core.types import HealthRecord

DISCLAIMER = "Screening & education only; not medical advice."


def build_pdf(record: HealthRecord, rows: list[list[str]], country: Optional[str] = None,
              disclaimer: str = DISCLAIMER) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, title="Health Risk Report")
    styles = getSampleStyleSheet()
    story = []
    d = record.demographics

    story.append(Paragraph("<b>Health Risk Report</b>", styles["Title"]))
    pinfo = (
        f"<b>Client:</b> {d.name or '—'} &nbsp;&nbsp; "
        f"<b>Gender:</b> {d.gender or '—'} &nbsp;&nbsp; "
        f"<b>Age:</b> {int(d.age) if d.age is not None else '—'}"
    )
    story.append(Paragraph(pinfo, styles["Normal"]))
    meta = f"<b>Source:</b> {record.method or '—'}"
    if country:
        meta += f" &nbsp;&nbsp; <b>Country:</b> {country}"
    if record.timestamp:
        meta += f" &nbsp;&nbsp; <b>Date:</b> {record.timestamp[:10]}"
    story.append(Paragraph(meta, styles["Normal"]))
    story.append(Spacer(1, 8))

    if rows:
        tbl = Table(
            [["Metric", "Value", "Interpretation"]] + rows,
            hAlign='LEFT',
            colWidths=[150, 90, 250]
        )
        tbl.setStyle(TableStyle([
            ('BACKGROUND', (0,0), (-1,0), colors.HexColor('#eeeeee')),
            ('GRID', (0,0), (-1,-1), 0.25, colors.grey),
            ('FONTNAME', (0,0), (-1,0), 'Helvetica-Bold'),
            ('ROWBACKGROUNDS', (0,1), (-1,-1), [colors.white, colors.HexColor('#fafafa')]),
        ]))
        story.append(tbl)
    else:
        story.append(Paragraph("No scores could be computed from the supplied data.", styles["Normal"]))

    story.append(Spacer(1, 10))
    story.append(Paragraph(f"<b>Disclaimer:</b> {disclaimer}", styles['Italic']))

    doc.build(story)
    return buf.getvalue()
