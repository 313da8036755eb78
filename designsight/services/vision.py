# designsight/services/vision.py
import asyncio
import os
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

from google.cloud import vision
from starlette.concurrency import run_in_threadpool

from designsight.core.config import settings
from designsight.core.errors import UpstreamServiceError
from designsight.core.logging import logger
from designsight.services.synthesis import (
    ColorSample, ObjectRegion, TextRegion, Vertex, VisionAnnotations,
)

SAFE_SEARCH_FIELDS = ("adult", "spoof", "medical", "violence", "racy")


def _vertices(points) -> List[Vertex]:
    return [Vertex(x=float(p.x or 0), y=float(p.y or 0)) for p in points]


class VisionAnalyzer:
    """
    Thin adapter over the Cloud Vision ImageAnnotatorClient.

    Each detect_* method performs one blocking annotation call and converts
    the response into plain annotation records. annotate() runs all four
    concurrently; a category that fails contributes an empty result.
    """

    def __init__(self, client: Optional[Any] = None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            try:
                credentials_file = settings.VISION_CREDENTIALS_FILE
                if credentials_file and os.path.exists(credentials_file):
                    self._client = vision.ImageAnnotatorClient.from_service_account_json(credentials_file)
                else:
                    self._client = vision.ImageAnnotatorClient()
                logger.info("Google Vision client initialized")
            except Exception as e:
                logger.error(f"Google Vision client initialization failed: {str(e)}")
                raise UpstreamServiceError("vision", f"Client unavailable: {e}") from e
        return self._client

    @staticmethod
    def _check(response, feature: str):
        error = getattr(response, "error", None)
        if error is not None and getattr(error, "message", ""):
            raise UpstreamServiceError("vision", f"{feature} failed: {error.message}")
        return response

    def detect_text(self, content: bytes) -> List[TextRegion]:
        response = self._check(self.client.text_detection(image=vision.Image(content=content)), "text detection")
        return [
            TextRegion(
                description=annotation.description,
                vertices=_vertices(annotation.bounding_poly.vertices),
            )
            for annotation in response.text_annotations
        ]

    def detect_objects(self, content: bytes) -> List[ObjectRegion]:
        response = self._check(
            self.client.object_localization(image=vision.Image(content=content)), "object localization"
        )
        return [
            ObjectRegion(
                name=annotation.name,
                normalized_vertices=_vertices(annotation.bounding_poly.normalized_vertices),
                score=float(annotation.score or 0),
            )
            for annotation in response.localized_object_annotations
        ]

    def detect_colors(self, content: bytes) -> List[ColorSample]:
        response = self._check(self.client.image_properties(image=vision.Image(content=content)), "image properties")
        return [
            ColorSample(
                red=float(info.color.red or 0),
                green=float(info.color.green or 0),
                blue=float(info.color.blue or 0),
                score=float(info.score or 0),
                pixel_fraction=float(info.pixel_fraction or 0),
            )
            for info in response.image_properties_annotation.dominant_colors.colors
        ]

    def detect_safe_search(self, content: bytes) -> Optional[Dict[str, str]]:
        response = self._check(
            self.client.safe_search_detection(image=vision.Image(content=content)), "safe search"
        )
        annotation = response.safe_search_annotation
        if annotation is None:
            return None
        result = {}
        for name in SAFE_SEARCH_FIELDS:
            value = getattr(annotation, name, None)
            result[name] = getattr(value, "name", str(value))
        return result

    async def _safely(self, feature: str, detect: Callable[[bytes], Any], content: bytes, empty: Any):
        try:
            return await run_in_threadpool(detect, content)
        except Exception as e:
            logger.bind(feature=feature).warning(f"Vision {feature} failed, continuing without it: {e}")
            return empty

    async def annotate(self, content: bytes) -> VisionAnnotations:
        # Resolve the client first so an unavailable service fails the whole call
        _ = self.client
        text_regions, object_regions, colors, safe_search = await asyncio.gather(
            self._safely("text", self.detect_text, content, []),
            self._safely("objects", self.detect_objects, content, []),
            self._safely("colors", self.detect_colors, content, []),
            self._safely("safe_search", self.detect_safe_search, content, None),
        )
        return VisionAnnotations(
            text_regions=text_regions,
            object_regions=object_regions,
            colors=colors,
            safe_search=safe_search,
        )


@lru_cache()
def get_vision_analyzer() -> VisionAnalyzer:
    return VisionAnalyzer()
