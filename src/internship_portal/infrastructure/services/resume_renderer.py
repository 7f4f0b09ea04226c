"""
Resume Renderer
Builds a student's PDF resume (curriculo) with reportlab
"""
import io
from datetime import date
from typing import List, Optional
from xml.sax.saxutils import escape

from loguru import logger
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from internship_portal.core.exceptions import ResumeRenderingException
from internship_portal.domain.entities import Education, Experience, Identity
from internship_portal.domain.enums import SKILL_LEVEL_LABELS
from internship_portal.application.services.resume.interfaces import IResumeRenderer


RESUME_FILENAME = "curriculo.pdf"
ACCENT = colors.HexColor("#1f4e79")


def format_period(start: Optional[date], end: Optional[date], ongoing: bool) -> str:
    """MM/yyyy period label for education/experience lines"""
    start_text = start.strftime("%m/%Y") if start else None
    end_text = end.strftime("%m/%Y") if end else None

    if ongoing:
        return f"{start_text} - Atual" if start_text else "Atual"
    if start_text and end_text:
        return f"{start_text} - {end_text}"
    if end_text:
        return f"Até {end_text}"
    if start_text:
        return f"Desde {start_text}"
    return ""


def skill_level_label(level: Optional[int]) -> str:
    if level is None:
        return "-"
    return SKILL_LEVEL_LABELS.get(level, str(level))


class ReportlabResumeRenderer(IResumeRenderer):
    """A4 resume with contact table, academic, professional and skill sections"""

    def __init__(self):
        styles = getSampleStyleSheet()
        self.name_style = ParagraphStyle(
            "ResumeName",
            parent=styles["Title"],
            fontSize=20,
            spaceAfter=2,
            alignment=TA_CENTER,
            textColor=ACCENT,
        )
        self.course_style = ParagraphStyle(
            "ResumeCourse",
            parent=styles["Normal"],
            fontSize=12,
            alignment=TA_CENTER,
            spaceAfter=12,
            textColor=colors.HexColor("#444444"),
        )
        self.section_style = ParagraphStyle(
            "SectionHeader",
            parent=styles["Heading2"],
            fontSize=13,
            spaceBefore=12,
            spaceAfter=6,
            textColor=ACCENT,
        )
        self.body_style = ParagraphStyle(
            "BodyText",
            parent=styles["Normal"],
            fontSize=10,
            leading=14,
            alignment=TA_JUSTIFY,
            spaceAfter=4,
        )
        self.detail_style = ParagraphStyle(
            "DetailText",
            parent=self.body_style,
            fontSize=9,
            textColor=colors.HexColor("#666666"),
        )

    def render(self, student: Identity) -> bytes:
        profile = student.student
        if profile is None:
            raise ResumeRenderingException(f"Identity {student.id} has no student profile")

        buffer = io.BytesIO()
        try:
            doc = SimpleDocTemplate(
                buffer,
                pagesize=A4,
                rightMargin=2 * cm,
                leftMargin=2 * cm,
                topMargin=2 * cm,
                bottomMargin=2 * cm,
                title=f"Currículo - {student.name}",
            )
            doc.build(self._build_story(student))
        except Exception as e:
            logger.error(f"Failed to render resume for student {student.id}: {e}")
            raise ResumeRenderingException(f"Failed to generate resume: {str(e)}")

        logger.info(f"Rendered resume for student {student.id}")
        return buffer.getvalue()

    def _build_story(self, student: Identity) -> List:
        profile = student.student
        story = [Paragraph(escape(student.name), self.name_style)]
        if profile.course:
            story.append(Paragraph(escape(profile.course), self.course_style))

        # Contact information
        info_rows = [["E-mail", str(student.email)]]
        if student.phone:
            info_rows.append(["Telefone", student.phone])
        if profile.birthdate:
            info_rows.append(["Data de Nascimento", profile.birthdate.strftime("%d/%m/%Y")])
        story.append(self._info_table(info_rows))

        if profile.bio:
            story.append(Paragraph("Resumo Profissional", self.section_style))
            story.append(Paragraph(escape(profile.bio), self.body_style))

        if profile.education:
            story.append(Paragraph("Formação Acadêmica", self.section_style))
            for item in profile.education:
                story.extend(self._education_block(item))

        if profile.experience:
            story.append(Paragraph("Experiência Profissional", self.section_style))
            for item in profile.experience:
                story.extend(self._experience_block(item))

        if profile.skills:
            story.append(Paragraph("Habilidades", self.section_style))
            rows = [["Habilidade", "Nível", "Categoria"]]
            rows.extend(
                [skill.name, skill_level_label(skill.level), skill.category or "-"]
                for skill in profile.skills
            )
            story.append(self._grid_table(rows))

        if profile.interest_areas:
            story.append(Paragraph("Áreas de Interesse", self.section_style))
            names = ", ".join(area.name for area in profile.interest_areas)
            story.append(Paragraph(escape(names), self.body_style))

        links = [
            (label, value)
            for label, value in (
                ("LinkedIn", profile.linkedin),
                ("GitHub", profile.github),
                ("Portfólio", profile.portfolio),
            )
            if value
        ]
        if links:
            story.append(Paragraph("Links", self.section_style))
            for label, value in links:
                story.append(Paragraph(f"<b>{label}:</b> {escape(value)}", self.body_style))

        return story

    def _education_block(self, item: Education) -> List:
        title = f"<b>{escape(item.course)}</b> - {escape(item.institution)}"
        details = [
            part for part in (
                item.level,
                format_period(item.start_date, item.end_date, item.in_progress),
            )
            if part
        ]
        block = [Paragraph(title, self.body_style)]
        if details:
            block.append(Paragraph(escape(" | ".join(details)), self.detail_style))
        if item.description:
            block.append(Paragraph(escape(item.description), self.body_style))
        block.append(Spacer(1, 4))
        return block

    def _experience_block(self, item: Experience) -> List:
        title = f"<b>{escape(item.role_title)}</b> - {escape(item.company)}"
        block = [Paragraph(title, self.body_style)]
        period = format_period(item.start_date, item.end_date, item.current)
        if period:
            block.append(Paragraph(escape(period), self.detail_style))
        if item.description:
            block.append(Paragraph(escape(item.description), self.body_style))
        block.append(Spacer(1, 4))
        return block

    def _info_table(self, rows) -> Table:
        table = Table(rows, colWidths=[4.5 * cm, 12.5 * cm])
        table.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("TEXTCOLOR", (0, 0), (0, -1), ACCENT),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]))
        return table

    def _grid_table(self, rows) -> Table:
        table = Table(rows, colWidths=[7 * cm, 5 * cm, 5 * cm])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), ACCENT),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#cccccc")),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f2f6fa")]),
        ]))
        return table
