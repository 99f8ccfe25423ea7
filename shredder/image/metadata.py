"""Embedded image metadata decoding (TIFF/EXIF, GPS, IPTC and XMP) via Pillow.

Tag names follow the conventions of common EXIF tooling: ``DateTime`` is
reported as ``ModifyDate`` and ``DateTimeDigitized`` as ``CreateDate``.
Sub-IFD pointers, the thumbnail IFD and maker notes are not reported.
"""

import io
import re
from collections.abc import Iterable
from datetime import datetime
from typing import ClassVar

import pillow_heif
from PIL import ExifTags, Image, IptcImagePlugin, TiffImagePlugin

from shredder.engine.exceptions import DecodeError

_EXIF_DATE_RE = re.compile(r"^\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2}$")
_EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

Tag = tuple[str, object]


class ImageMetadataReader:
    """Decodes embedded metadata into an ordered list of (name, value) tags."""

    _RENAMED: ClassVar[dict[str, str]] = {
        "DateTime": "ModifyDate",
        "DateTimeDigitized": "CreateDate",
    }

    _SKIPPED: ClassVar[frozenset[str]] = frozenset(
        {"ExifOffset", "GPSInfo", "InteropOffset", "MakerNote", "PrintImageMatching"}
    )

    _IPTC_DATASETS: ClassVar[dict[tuple[int, int], str]] = {
        (2, 5): "ObjectName",
        (2, 25): "Keywords",
        (2, 55): "DateCreated",
        (2, 80): "Byline",
        (2, 85): "BylineTitle",
        (2, 90): "City",
        (2, 95): "State",
        (2, 101): "Country",
        (2, 105): "Headline",
        (2, 110): "Credit",
        (2, 115): "Source",
        (2, 116): "CopyrightNotice",
        (2, 120): "Caption",
        (2, 122): "Writer",
    }

    def __init__(self) -> None:
        pillow_heif.register_heif_opener()

    def read(self, data: bytes) -> list[Tag]:
        """Decode every supported metadata block in *data*.

        Raises:
            DecodeError: if Pillow cannot open the image.
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                tags: list[Tag] = []
                seen: set[str] = set()
                exif = img.getexif()
                self._collect(tags, seen, exif.items(), ExifTags.TAGS)
                self._collect(tags, seen, exif.get_ifd(ExifTags.IFD.Exif).items(), ExifTags.TAGS)
                self._collect(
                    tags, seen, exif.get_ifd(ExifTags.IFD.GPSInfo).items(), ExifTags.GPSTAGS
                )
                self._collect_iptc(tags, seen, img)
                self._collect_xmp(tags, seen, img)
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(f"Image metadata could not be decoded: {exc}") from exc
        return tags

    def _collect(
        self,
        tags: list[Tag],
        seen: set[str],
        items: Iterable[tuple[int, object]],
        names: dict[int, str],
    ) -> None:
        for tag_id, value in items:
            name = names.get(tag_id, f"Tag0x{tag_id:04X}")
            if name in self._SKIPPED:
                continue
            self._add(tags, seen, self._RENAMED.get(name, name), normalize_value(value))

    def _collect_iptc(self, tags: list[Tag], seen: set[str], img: Image.Image) -> None:
        info = IptcImagePlugin.getiptcinfo(img) or {}
        for (record, dataset), value in info.items():
            name = self._IPTC_DATASETS.get((record, dataset), f"IPTC{record}:{dataset}")
            self._add(tags, seen, name, normalize_value(value))

    def _collect_xmp(self, tags: list[Tag], seen: set[str], img: Image.Image) -> None:
        xmp = img.getxmp() if "xmp" in img.info else {}
        rdf = xmp.get("xmpmeta", {}).get("RDF", {}) if isinstance(xmp, dict) else {}
        descriptions = rdf.get("Description", []) if isinstance(rdf, dict) else []
        if isinstance(descriptions, dict):
            descriptions = [descriptions]
        for description in descriptions:
            if not isinstance(description, dict):
                continue
            for name, value in description.items():
                if name == "about":
                    continue
                self._add(tags, seen, name, normalize_value(value))

    @staticmethod
    def _add(tags: list[Tag], seen: set[str], name: str, value: object) -> None:
        if name in seen:
            return
        seen.add(name)
        tags.append((name, value))


def normalize_value(value: object) -> object:
    """Convert Pillow value types into plain Python values.

    Rationals become floats, EXIF date strings become datetimes, IPTC byte
    strings are decoded and sequences are normalized element-wise.
    """
    if isinstance(value, TiffImagePlugin.IFDRational):
        return float(value)
    if isinstance(value, (tuple, list)):
        return [normalize_value(item) for item in value]
    if isinstance(value, bytes):
        text = value.rstrip(b"\x00")
        if text.isascii() and text.decode("ascii").isprintable():
            return text.decode("ascii")
        return value
    if isinstance(value, str):
        text = value.rstrip("\x00").strip()
        if _EXIF_DATE_RE.match(text):
            try:
                return datetime.strptime(text, _EXIF_DATE_FORMAT)
            except ValueError:
                return text
        return text
    return value
