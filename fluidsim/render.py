import numpy as np


def density_to_pixels(density):
    """Clamp density to [0, 1] and scale to a single-channel 8-bit image."""
    return (np.clip(density, 0.0, 1.0) * 255).astype(np.uint8)


def density_to_rgb(density):
    """Grey (W, H, 3) image with y flipped so row 0 of the grid ends up at the bottom."""
    img = density_to_pixels(density)[:, ::-1]
    return np.stack([img, img, img], axis=2)
