import numpy as np

DEFAULT_PROBABILITY = 0.05
DEFAULT_INTENSITY = 2


def perturb_pixels(
    pixels: np.ndarray,
    rng: np.random.Generator,
    probability: float = DEFAULT_PROBABILITY,
    intensity: int = DEFAULT_INTENSITY,
) -> np.ndarray:
    """Add bounded random noise to a random subset of pixels.

    Each pixel is selected independently with ``probability``. A selected
    pixel receives one non-zero integer offset drawn uniformly from
    ``[-intensity, -1] | [1, intensity]``, added to its three colour channels
    and clamped to ``[0, 255]``. Any alpha channel is left untouched.
    Returns a new ``uint8`` array of the same shape.
    """
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3|4) pixel array, got shape {pixels.shape}")

    height, width = pixels.shape[:2]
    selected = rng.random((height, width)) < probability
    magnitudes = rng.integers(1, intensity + 1, size=(height, width)) if intensity else 0
    signs = rng.choice(np.array([-1, 1], dtype=np.int16), size=(height, width))
    offsets = np.where(selected, magnitudes * signs, 0).astype(np.int16)

    result = pixels.copy()
    colour = result[:, :, :3].astype(np.int16) + offsets[:, :, np.newaxis]
    result[:, :, :3] = np.clip(colour, 0, 255).astype(np.uint8)
    return result
