from .image_service import (
    ImageService,
    apply_grayscale_average,
    apply_grayscale_lightness,
    apply_grayscale_luminosity,
    apply_sepia,
    apply_transform,
    copy,
    load,
    save,
)
