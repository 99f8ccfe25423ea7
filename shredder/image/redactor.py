import io

import numpy as np
from PIL import Image, ImageOps

from shredder.engine.base import BaseRedactor
from shredder.engine.classifier import is_heic
from shredder.engine.exceptions import DecodeError, EncodeError
from shredder.engine.models import FileBuffer, Narrator, RedactedBlob
from shredder.image.heic import HeicConverter, transcode_best_effort
from shredder.image.noise import DEFAULT_INTENSITY, DEFAULT_PROBABILITY, perturb_pixels
from shredder.logging.logger import Log


class ImageRedactor(BaseRedactor):
    """Re-renders the pixels onto a fresh image, dropping every metadata segment.

    A perturbation pass adds faint per-pixel noise before export. JPEG and
    WEBP keep their type; every other input is exported as PNG.
    """

    OUTPUT_FORMATS: dict[str, tuple[str, str]] = {
        "image/jpeg": ("JPEG", "image/jpeg"),
        "image/jpg": ("JPEG", "image/jpeg"),
        "image/webp": ("WEBP", "image/webp"),
        "image/png": ("PNG", "image/png"),
    }
    FALLBACK_FORMAT = ("PNG", "image/png")

    def __init__(
        self,
        converter: HeicConverter,
        *,
        quality: int = 95,
        noise_probability: float = DEFAULT_PROBABILITY,
        noise_intensity: int = DEFAULT_INTENSITY,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._converter = converter
        self._quality = quality
        self._noise_probability = noise_probability
        self._noise_intensity = noise_intensity
        self._rng = rng if rng is not None else np.random.default_rng()

    def redact(self, file: FileBuffer, narrate: Narrator) -> RedactedBlob:
        data, mime_type = file.data, file.mime_type
        if is_heic(file.name):
            narrate("[PROCESS] CONVERTING_HEIC_TO_JPEG...")
            transcoded = transcode_best_effort(
                self._converter, file, narrate, quality=self._quality
            )
            if not transcoded.converted:
                Log.warning(f"Redacting {file.name} without transcode: {transcoded.warning}")
            data, mime_type = transcoded.data, transcoded.mime_type

        pixels, source_mime = self._decode(data)
        pil_format, output_mime = self.OUTPUT_FORMATS.get(
            (mime_type or source_mime).lower(), self.FALLBACK_FORMAT
        )
        if pil_format == "JPEG" and pixels.shape[2] == 4:
            pixels = pixels[:, :, :3]

        narrate("[ACTION] INJECTING_VISUAL_NOISE (AI-PROOFING)...")
        pixels = perturb_pixels(
            pixels,
            self._rng,
            probability=self._noise_probability,
            intensity=self._noise_intensity,
        )

        narrate("[ACTION] STRIPPING_METADATA_SEGMENTS...")
        output = self._encode(pixels, pil_format)
        Log.info(
            f"Image re-encoded as {pil_format}: {pixels.shape[1]}x{pixels.shape[0]}, "
            f"{len(output)} bytes"
        )
        return RedactedBlob(data=output, mime_type=output_mime)

    @staticmethod
    def _decode(data: bytes) -> tuple[np.ndarray, str]:
        try:
            with Image.open(io.BytesIO(data)) as img:
                source_mime = Image.MIME.get(img.format or "", "")
                upright = ImageOps.exif_transpose(img)
                has_alpha = upright.mode in ("RGBA", "LA", "PA") or (
                    upright.mode == "P" and "transparency" in upright.info
                )
                pixels = np.array(upright.convert("RGBA" if has_alpha else "RGB"))
        except Exception as exc:
            raise DecodeError(f"Image could not be decoded: {exc}") from exc
        return pixels, source_mime

    def _encode(self, pixels: np.ndarray, pil_format: str) -> bytes:
        try:
            canvas = Image.fromarray(pixels)
            buf = io.BytesIO()
            if pil_format == "PNG":
                canvas.save(buf, format=pil_format)
            else:
                canvas.save(buf, format=pil_format, quality=self._quality)
            return buf.getvalue()
        except Exception as exc:
            raise EncodeError(f"Image could not be encoded as {pil_format}: {exc}") from exc
