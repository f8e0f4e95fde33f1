from .payload import decode_data_uri, decode_image, probe_dimensions
from .scaling import DEFAULT_IMAGE_SIZE, fit_image_size

__all__ = [
    'decode_data_uri',
    'decode_image',
    'probe_dimensions',
    'DEFAULT_IMAGE_SIZE',
    'fit_image_size'
]
