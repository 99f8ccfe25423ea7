import io

import pillow_heif

from shredder.engine.exceptions import ConversionWarning
from shredder.engine.models import FileBuffer, Narrator, TranscodeResult

JPEG_MIME_TYPE = "image/jpeg"


class HeicConverter:
    """Transcodes HEIC/HEIF stills to JPEG via pillow-heif."""

    def convert(self, data: bytes, quality: int = 95, keep_metadata: bool = False) -> bytes:
        """Return JPEG bytes for the primary image in *data*.

        With ``keep_metadata`` the EXIF block is carried into the JPEG so it
        can still be inspected.

        Raises:
            ConversionWarning: if the container cannot be decoded or re-encoded.
        """
        try:
            heif_file = pillow_heif.open_heif(io.BytesIO(data))
            image = heif_file.to_pillow()
            if image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            options: dict[str, object] = {"quality": quality}
            if keep_metadata and heif_file.info.get("exif"):
                options["exif"] = heif_file.info["exif"]
            buf = io.BytesIO()
            image.save(buf, format="JPEG", **options)
            return buf.getvalue()
        except Exception as exc:
            raise ConversionWarning(f"HEIC conversion failed: {exc}") from exc


def transcode_best_effort(
    converter: HeicConverter,
    file: FileBuffer,
    narrate: Narrator,
    *,
    quality: int = 95,
    keep_metadata: bool = False,
) -> TranscodeResult:
    """Convert *file* to JPEG, falling back to the original buffer on failure."""
    try:
        data = converter.convert(file.data, quality=quality, keep_metadata=keep_metadata)
    except ConversionWarning as warning:
        narrate("[WARN] HEIC_CONVERSION_FAILED. ATTEMPTING_RAW_READ...")
        return TranscodeResult(data=file.data, mime_type=file.mime_type, warning=str(warning))
    return TranscodeResult(data=data, mime_type=JPEG_MIME_TYPE)
