from shredder.engine.base import BaseInspector
from shredder.engine.classifier import is_heic
from shredder.engine.findings import clean_status, sort_by_risk, to_display_value
from shredder.engine.models import FileBuffer, Finding, Narrator, RiskLevel
from shredder.image.heic import HeicConverter, transcode_best_effort
from shredder.image.metadata import ImageMetadataReader
from shredder.logging.logger import Log

_HIGH_RISK_KEYS = ("GPSLatitude", "GPSLongitude", "Face", "RegionInfo")
_MEDIUM_RISK_KEYS = ("Make", "Model", "SerialNumber", "LensModel", "LensSerialNumber")
_LOW_RISK_KEYS = ("Software", "DateTimeOriginal", "CreateDate", "ModifyDate")


def classify_tag_risk(key: str) -> RiskLevel:
    """Risk of an image tag by key-substring membership, highest tier first."""
    if any(marker in key for marker in _HIGH_RISK_KEYS):
        return RiskLevel.HIGH
    if any(marker in key for marker in _MEDIUM_RISK_KEYS):
        return RiskLevel.MEDIUM
    if any(marker in key for marker in _LOW_RISK_KEYS):
        return RiskLevel.LOW
    return RiskLevel.NONE


class ImageInspector(BaseInspector):
    """Reports embedded image metadata tags with their risk level.

    Tags with no classified risk are only reported when their rendered value
    is shorter than ``blob_filter_length``, which keeps large binary blobs
    out of the result.
    """

    def __init__(
        self,
        converter: HeicConverter,
        reader: ImageMetadataReader,
        *,
        quality: int = 95,
        max_value_length: int = 50,
        blob_filter_length: int = 100,
    ) -> None:
        self._converter = converter
        self._reader = reader
        self._quality = quality
        self._max_value_length = max_value_length
        self._blob_filter_length = blob_filter_length

    def inspect(self, file: FileBuffer, narrate: Narrator) -> list[Finding]:
        data = file.data
        if is_heic(file.name):
            narrate("[PROCESS] CONVERTING_HEIC_FOR_INSPECTION...")
            transcoded = transcode_best_effort(
                self._converter, file, narrate, quality=self._quality, keep_metadata=True
            )
            if not transcoded.converted:
                Log.warning(f"Inspecting {file.name} without transcode: {transcoded.warning}")
            data = transcoded.data

        findings: list[Finding] = []
        for key, value in self._reader.read(data):
            display_value = to_display_value(value, self._max_value_length)
            risk_level = classify_tag_risk(key)
            if risk_level is RiskLevel.NONE and len(display_value) >= self._blob_filter_length:
                continue
            findings.append(Finding(key=key, display_value=display_value, risk_level=risk_level))

        Log.info(f"Image metadata: {len(findings)} tags reported")
        if not findings:
            return [clean_status()]
        return sort_by_risk(findings)
