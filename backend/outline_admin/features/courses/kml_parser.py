"""
KML track parser.

Extracts the ordered coordinate list of a course from a KML document.
Only the first <coordinates> element is read; KML namespaces are ignored.
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from pathlib import Path

from outline_admin.shared.errors import ParseError

from .schemas import Coordinate

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    """'{http://www.opengis.net/kml/2.2}coordinates' -> 'coordinates'"""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def parse_coordinate_token(token: str) -> Coordinate | None:
    """Parse a 'lon,lat[,alt]' token. Returns None if it is malformed."""
    fields = token.split(",")
    if len(fields) < 2:
        return None
    try:
        longitude = float(fields[0])
        latitude = float(fields[1])
    except ValueError:
        return None
    if not (math.isfinite(longitude) and math.isfinite(latitude)):
        return None
    return Coordinate(latitude=latitude, longitude=longitude)


class TrackFileParser:
    """Parser for KML course tracks."""

    def parse(self, file_contents: str) -> list[Coordinate]:
        """
        Parse KML text into a track path.

        Args:
            file_contents: KML document text

        Returns:
            Coordinates in document order. Empty if no token was valid.

        Raises:
            ParseError: If the text is not XML or has no coordinates element
        """
        try:
            root = ET.fromstring(file_contents.lstrip("\ufeff"))  # strip BOM if present
        except ET.ParseError as e:
            logger.error(f"Failed to parse KML: {e}")
            raise ParseError(f"Invalid KML file: {e}") from e

        element = next(
            (el for el in root.iter() if _local_name(el.tag) == "coordinates"),
            None,
        )
        if element is None:
            raise ParseError("KML file contains no coordinates element")

        tokens = (element.text or "").strip().split()
        path = []
        for token in tokens:
            coordinate = parse_coordinate_token(token)
            if coordinate is not None:
                path.append(coordinate)

        skipped = len(tokens) - len(path)
        if skipped:
            logger.warning(f"Skipped {skipped} malformed coordinate tokens")
        return path

    def parse_file(self, path: str | Path) -> list[Coordinate]:
        """Parse a local KML file."""
        content = Path(path).read_text(encoding="utf-8-sig")  # handles BOM
        return self.parse(content)
