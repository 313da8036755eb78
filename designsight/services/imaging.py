# designsight/services/imaging.py
import io
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image as PILImage, UnidentifiedImageError

from designsight.core.config import settings


class ImageValidationError(ValueError):
    """Upload is not an acceptable image"""


@dataclass
class ProcessedImage:
    content: bytes
    width: int
    height: int
    mime_type: str = "image/jpeg"

    @property
    def size(self) -> int:
        return len(self.content)


def fit_inside(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """
    Scale (width, height) down so both fit within the bounds, keeping the
    aspect ratio. Images already inside the bounds are never enlarged.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Image dimensions must be positive")
    scale = min(max_width / width, max_height / height, 1.0)
    return max(1, round(width * scale)), max(1, round(height * scale))


def validate_upload(content: bytes, content_type: Optional[str], max_size: Optional[int] = None) -> None:
    max_size = max_size or settings.MAX_UPLOAD_SIZE
    if not content:
        raise ImageValidationError("No image file provided")
    if not content_type or not content_type.startswith("image/"):
        raise ImageValidationError("Only image files are allowed")
    if len(content) > max_size:
        raise ImageValidationError(f"File too large. Maximum size is {max_size / 1024 / 1024:g} MB")


def decode_image(content: bytes, max_pixels: Optional[int] = None) -> PILImage.Image:
    """
    Decode image bytes. The header is checked against max_pixels first, so an
    oversized image is rejected without being decompressed.
    """
    max_pixels = max_pixels or settings.MAX_IMAGE_PIXELS
    try:
        img = PILImage.open(io.BytesIO(content))
        if img.width * img.height > max_pixels:
            raise ImageValidationError(
                f"Image too large: {img.width}x{img.height} exceeds {max_pixels} pixels"
            )
        img.load()
        return img
    except PILImage.DecompressionBombError as e:
        raise ImageValidationError(f"Image too large: {e}") from e
    except (UnidentifiedImageError, OSError) as e:
        raise ImageValidationError(f"Invalid image data: {e}") from e


def process_upload(
    content: bytes,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    quality: Optional[int] = None,
) -> ProcessedImage:
    """
    Resize an uploaded image to fit inside max_width x max_height and
    re-encode it as JPEG. The returned dimensions are those of the stored asset.
    """
    max_width = max_width or settings.MAX_IMAGE_WIDTH
    max_height = max_height or settings.MAX_IMAGE_HEIGHT
    quality = quality or settings.JPEG_QUALITY

    img = decode_image(content)
    target = fit_inside(img.width, img.height, max_width, max_height)
    if target != img.size:
        img = img.resize(target, PILImage.LANCZOS)

    # JPEG has no alpha channel or palette
    if img.mode != "RGB":
        img = img.convert("RGB")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=quality)
    return ProcessedImage(content=buffer.getvalue(), width=img.width, height=img.height)
