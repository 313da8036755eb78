# designsight/services/export.py
"""
Report assembly: summary statistics, the structured JSON document, the HTML
report and its PDF rendering.
"""
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from designsight.core.config import settings
from designsight.core.errors import UpstreamServiceError
from designsight.core.logging import logger
from designsight.schemas.export import (
    ExportDocument, ExportFeedback, ExportImage, ExportMetadata, ExportProject, FeedbackSummary,
)
from designsight.schemas.feedback import Role
from designsight.services.overlay import OverlayScale, severity_color, to_screen

REPORT_IMAGE_WIDTH = 720
AVAILABLE_ROLES = [role.value for role in Role]

_env = Environment(
    loader=PackageLoader("designsight", "templates"),
    autoescape=select_autoescape(["html"]),
)


def _value(field) -> str:
    return str(getattr(field, "value", field))


def generate_summary(feedback: Iterable) -> FeedbackSummary:
    """
    Count feedback by category, severity and status. Only values that occur
    appear as keys.
    """
    by_category, by_severity, by_status = Counter(), Counter(), Counter()
    total = 0
    for item in feedback:
        total += 1
        by_category[_value(item.category)] += 1
        by_severity[_value(item.severity)] += 1
        by_status[_value(item.status)] += 1
    return FeedbackSummary(
        total_feedback=total,
        by_category=dict(by_category),
        by_severity=dict(by_severity),
        by_status=dict(by_status),
    )


@dataclass
class ExportData:
    project: object
    feedback: List
    summary: FeedbackSummary
    export_date: str
    image: Optional[dict] = None
    role: Optional[str] = None

    @classmethod
    def collect(cls, project, feedback, image: Optional[dict] = None, role: Optional[str] = None):
        items = list(feedback)
        return cls(
            project=project,
            feedback=items,
            summary=generate_summary(items),
            export_date=datetime.now(timezone.utc).isoformat(),
            image=image,
            role=role,
        )

    def filename(self, prefix: str, extension: str) -> str:
        # Header-safe: ASCII letters, digits and dashes only
        name = re.sub(r"[^A-Za-z0-9]+", "-", self.project.name).strip("-") or "project"
        return f"{prefix}-{name}-{self.export_date[:10]}.{extension}"


def build_document(data: ExportData) -> ExportDocument:
    image = data.image
    return ExportDocument(
        metadata=ExportMetadata(
            export_date=data.export_date,
            project_name=data.project.name,
            image_name=image["original_name"] if image else None,
            role=data.role,
            total_feedback=data.summary.total_feedback,
        ),
        project=ExportProject.model_validate(data.project),
        image=ExportImage.model_validate(image) if image else None,
        feedback=[ExportFeedback.model_validate(item) for item in data.feedback],
        summary=data.summary,
    )


def generate_json(data: ExportData) -> str:
    return build_document(data).model_dump_json(by_alias=True, indent=2)


def build_report_overlay(data: ExportData, base_url: Optional[str] = None) -> Optional[dict]:
    """Image and feedback rectangles at the report's fixed display width"""
    image = data.image
    if not image or not image.get("width") or not image.get("height"):
        return None

    base_url = (base_url or settings.PUBLIC_BASE_URL).rstrip("/")
    display_height = round(image["height"] * REPORT_IMAGE_WIDTH / image["width"])
    scale = OverlayScale.between(REPORT_IMAGE_WIDTH, display_height, image["width"], image["height"])
    rects = []
    for item in data.feedback:
        box = to_screen(item.coordinates, scale).rounded()
        color = severity_color(item.severity)
        rects.append({
            "x": box.x,
            "y": box.y,
            "width": box.width,
            "height": box.height,
            "color": color,
            "background": f"{color}33",
        })
    return {
        "image_url": f"{base_url}{settings.API_PREFIX}/upload/image/{image['id']}/file",
        "width": REPORT_IMAGE_WIDTH,
        "height": display_height,
        "rects": rects,
    }


def generate_html(data: ExportData, base_url: Optional[str] = None) -> str:
    template = _env.get_template("report.html")
    return template.render(
        project=data.project,
        image=data.image,
        feedback=data.feedback,
        summary=data.summary,
        export_date=data.export_date,
        role=data.role,
        overlay=build_report_overlay(data, base_url),
        value=_value,
    )


def render_pdf(html: str) -> bytes:
    try:
        from weasyprint import HTML
    except (ImportError, OSError) as e:
        # WeasyPrint raises OSError when its native libraries are missing
        raise UpstreamServiceError("pdf renderer", f"PDF generation requires WeasyPrint: {e}") from e

    try:
        return HTML(string=html, base_url=settings.PUBLIC_BASE_URL).write_pdf()
    except Exception as e:
        logger.error(f"PDF generation error: {str(e)}")
        raise UpstreamServiceError("pdf renderer", f"PDF generation failed: {e}") from e


def generate_pdf(data: ExportData) -> bytes:
    return render_pdf(generate_html(data))
