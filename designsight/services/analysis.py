# designsight/services/analysis.py
from typing import Optional

from designsight.core.errors import UpstreamServiceError
from designsight.core.logging import logger
from designsight.services.imaging import ImageValidationError, decode_image
from designsight.services.synthesis import DesignAnalysis, synthesize_feedback
from designsight.services.vision import VisionAnalyzer


class AnalysisError(UpstreamServiceError):
    def __init__(self, message: str):
        super().__init__("ai analysis", message)


async def analyze_design(
    content: bytes,
    analyzer: VisionAnalyzer,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> DesignAnalysis:
    """
    Run the vision annotations over an image and synthesize feedback drafts.

    The image must decode before any annotation call is made. When width or
    height are not known they are read from the decoded image.
    """
    try:
        decoded = decode_image(content)
    except ImageValidationError as e:
        raise AnalysisError(f"Image could not be decoded: {e}") from e

    width = width or decoded.width
    height = height or decoded.height

    annotations = await analyzer.annotate(content)
    result = synthesize_feedback(annotations, width, height)
    logger.bind(width=width, height=height).info(
        f"Design analysis produced {len(result.feedback)} feedback drafts "
        f"({len(annotations.text_regions)} text regions, {len(annotations.object_regions)} objects, "
        f"{len(annotations.colors)} colors)"
    )
    return result
