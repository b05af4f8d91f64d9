# -*- coding: utf-8 -*-
"""
Suggestions PDF export

Renders a one-document summary of the peptide suggestions for an age and goal.
"""

from __future__ import annotations

from datetime import datetime
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .catalog import GOALS
from .models import Suggestion
from .service import get_age_group

DISCLAIMER = (
    "These suggestions are informational only and are not medical advice. "
    "Consult with a healthcare provider before starting any peptide protocol."
)


def _goal_label(goal: str) -> str:
    for option in GOALS:
        if option["value"] == goal:
            return option["label"]
    return goal


class SuggestionsPDFGenerator:
    """PDF generator for peptide suggestions."""

    def __init__(self) -> None:
        self._setup_styles()

    def _setup_styles(self) -> None:
        self.styles = getSampleStyleSheet()
        self.styles.add(ParagraphStyle(
            name='SuggestionTitle',
            fontName='Helvetica-Bold',
            fontSize=18,
            leading=24,
            alignment=1,
            spaceAfter=12,
        ))
        self.styles.add(ParagraphStyle(
            name='SuggestionHeading',
            fontName='Helvetica-Bold',
            fontSize=14,
            leading=18,
            spaceBefore=12,
            spaceAfter=6,
            textColor=colors.HexColor('#2c3e50'),
        ))
        self.styles.add(ParagraphStyle(
            name='SuggestionBody',
            fontName='Helvetica',
            fontSize=10,
            leading=14,
            spaceBefore=3,
            spaceAfter=3,
        ))
        self.styles.add(ParagraphStyle(
            name='SuggestionSmall',
            fontName='Helvetica',
            fontSize=8,
            leading=10,
            textColor=colors.grey,
        ))

    def generate(
        self,
        age: int,
        goal: str,
        suggestions: List[Suggestion],
        generated_at: Optional[datetime] = None,
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=2*cm,
            leftMargin=2*cm,
            topMargin=2*cm,
            bottomMargin=2*cm,
            title="Peptide Suggestions",
        )

        story = []
        story.append(Paragraph("Personalized Peptide Suggestions", self.styles['SuggestionTitle']))
        story.append(Spacer(1, 12))
        story.extend(self._build_profile_section(age, goal, generated_at or datetime.now()))
        for suggestion in suggestions:
            story.extend(self._build_suggestion_section(suggestion))
        story.append(Spacer(1, 18))
        story.append(Paragraph(escape(DISCLAIMER), self.styles['SuggestionSmall']))

        doc.build(story)
        pdf_content = buffer.getvalue()
        buffer.close()
        return pdf_content

    def _build_profile_section(self, age: int, goal: str, generated_at: datetime) -> List:
        elements = []
        elements.append(Paragraph("Your Profile", self.styles['SuggestionHeading']))
        elements.append(HRFlowable(width="100%", thickness=1, color=colors.grey))

        data = [
            ["Age", f"{age}", "Age group", get_age_group(age).title()],
            ["Health goal", _goal_label(goal), "Generated", generated_at.strftime("%Y-%m-%d %H:%M")],
        ]
        table = Table(data, colWidths=[3*cm, 5*cm, 3*cm, 5*cm])
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('TEXTCOLOR', (0, 0), (0, -1), colors.grey),
            ('TEXTCOLOR', (2, 0), (2, -1), colors.grey),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 12))
        return elements

    def _build_suggestion_section(self, suggestion: Suggestion) -> List:
        elements = []
        elements.append(Paragraph(escape(suggestion.name), self.styles['SuggestionHeading']))
        elements.append(HRFlowable(width="100%", thickness=0.5, color=colors.lightgrey))
        elements.append(Paragraph(escape(suggestion.description), self.styles['SuggestionBody']))

        age_range = suggestion.age_recommendation
        details = [
            ["Suggested dosage", suggestion.dosage],
            ["Timing", suggestion.timing],
            ["Recommended ages", f"{age_range.min}-{age_range.max}"],
            ["Benefits", ", ".join(suggestion.benefits)],
        ]
        table = Table(details, colWidths=[4*cm, 12*cm])
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('TEXTCOLOR', (0, 0), (0, -1), colors.grey),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))
        elements.append(table)

        if suggestion.personalized_note:
            elements.append(Paragraph(f"<i>{escape(suggestion.personalized_note)}</i>", self.styles['SuggestionBody']))
        elements.append(Spacer(1, 8))
        return elements


def render_suggestions_pdf(age: int, goal: str, suggestions: List[Suggestion]) -> bytes:
    return SuggestionsPDFGenerator().generate(age, goal, suggestions)
