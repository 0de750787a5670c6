"""
SkinTone Imaging Utilities
Handles upload validation, decoding into pixel buffers, and resizing.
"""
import io
from typing import Optional

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image, ImageOps

from skintone.config import config
from skintone.services.pixels import PixelBuffer


class UnprocessableImageError(ValueError):
    """Raised when uploaded bytes cannot be turned into a pixel buffer."""


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for security and format compliance.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 400 for invalid files, 415 for unsupported formats
    """
    # Check file size (file.size might be None for some clients)
    if getattr(file, 'size', None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    # Validate MIME type
    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    # Validate file extension
    if file.filename:
        ext = file.filename.lower().split('.')[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        UnprocessableImageError: For truncated or non-image data
    """
    if len(file_bytes) < 8:
        raise UnprocessableImageError("File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    else:
        raise UnprocessableImageError("Invalid image file. Magic bytes don't match supported formats.")


def resize_long_edge(img: np.ndarray, max_edge: Optional[int] = None, allow_upscale: bool = False) -> np.ndarray:
    """
    Resize image so the longest edge is at most max_edge pixels.

    Args:
        img: Image array (h, w) or (h, w, channels)
        max_edge: Maximum edge size (default from config)
        allow_upscale: Also enlarge smaller images so the long edge equals max_edge

    Returns:
        Resized image, or the input unchanged when already at the target size
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    height, width = img.shape[:2]
    current_max = max(height, width)

    if current_max == max_edge or (current_max < max_edge and not allow_upscale):
        return img

    scale = max_edge / current_max
    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))

    # INTER_AREA for downscaling, bilinear for enlarging
    interpolation = cv2.INTER_AREA if scale < 1 else cv2.INTER_LINEAR
    return cv2.resize(img, (new_width, new_height), interpolation=interpolation)


def read_image_bytes(file_bytes: bytes, max_edge: Optional[int] = None) -> PixelBuffer:
    """
    Decode JPEG/PNG bytes into an RGBA pixel buffer.

    EXIF orientation is applied and the long edge is capped at max_edge.

    Raises:
        ValueError: For a long-edge cap outside the supported range
        UnprocessableImageError: For oversized, corrupt, undecodable or too-small images
    """
    if max_edge is not None and not config.validate_max_edge(max_edge):
        raise ValueError(f"Invalid max_edge value: {max_edge}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise UnprocessableImageError(f"File too large. Maximum size: {config.MAX_FILE_MB}MB")

    validate_magic_bytes(file_bytes)

    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        pil_image = ImageOps.exif_transpose(pil_image)
        if pil_image.mode != 'RGBA':
            pil_image = pil_image.convert('RGBA')
        rgba = np.array(pil_image, dtype=np.uint8)
    except Exception as e:
        raise UnprocessableImageError(f"Failed to decode image: {str(e)}") from e

    height, width = rgba.shape[:2]
    if width < config.MIN_EDGE or height < config.MIN_EDGE:
        raise UnprocessableImageError(f"Image too small. Minimum dimension: {config.MIN_EDGE}px")

    return PixelBuffer(resize_long_edge(rgba, max_edge))


async def read_image(file: UploadFile, max_edge: Optional[int] = None) -> PixelBuffer:
    """
    Safely read and decode an uploaded image into a pixel buffer.

    Args:
        file: FastAPI UploadFile object
        max_edge: Long-edge cap (default from config)

    Raises:
        UnprocessableImageError: When the upload cannot be read or decoded
    """
    try:
        file_bytes = await file.read()
    except Exception as e:
        raise UnprocessableImageError(f"Failed to read file: {str(e)}") from e

    return read_image_bytes(file_bytes, max_edge)
