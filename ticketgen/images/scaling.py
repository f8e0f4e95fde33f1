from typing import Optional, Tuple

# Size used when an image's intrinsic dimensions are unknown
DEFAULT_IMAGE_SIZE = (420, 260)


def fit_image_size(width: Optional[int],
                   height: Optional[int],
                   max_width: float,
                   max_height: Optional[float] = None,
                   default_size: Tuple[int, int] = DEFAULT_IMAGE_SIZE) -> Tuple[int, int]:
    """Compute render dimensions that fit inside a bounding box.

    The image is scaled down uniformly so that it fits within ``max_width``
    (and ``max_height`` when given). Images that already fit are left at
    their intrinsic size; nothing is ever enlarged.

    Args:
        width: Intrinsic width in pixels, or None if unknown
        height: Intrinsic height in pixels, or None if unknown
        max_width: Maximum render width in pixels
        max_height: Optional maximum render height in pixels
        default_size: (width, height) used when the intrinsic size is unknown

    Returns:
        Tuple of (width, height) in whole pixels, each at least 1
    """
    if not width or not height or width <= 0 or height <= 0:
        width, height = default_size

    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")
    if max_height is not None and max_height <= 0:
        raise ValueError(f"max_height must be positive, got {max_height}")

    scale = min(1.0, max_width / width)
    if max_height is not None:
        scale = min(scale, max_height / height)

    return max(1, round(width * scale)), max(1, round(height * scale))
