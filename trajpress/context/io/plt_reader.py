"""
Reader for Geolife trajectory files (.plt)

Each file starts with 6 header lines, followed by one record per line:

    latitude,longitude,0,altitude,days,date,time
    39.984702,116.318417,0,492,39744.1201851852,2008-10-23,02:53:04

`days` counts fractional days since 1899-12-30; altitude is in feet, -777 when
unknown. Points are snapped to the codec grid so that they round-trip exactly.
"""

from pathlib import Path
from typing import Iterable, List, Tuple

from trajpress.context.encoding.point_codec import snap_to_grid
from trajpress.errors import EncodingOverflow, PltParseError
from trajpress.models import Point, Trajectory

HEADER_LINES = 6
FIELD_COUNT = 7

# Days between 1899-12-30 and 1970-01-01
EPOCH_OFFSET_DAYS = 25569.0
SECONDS_PER_DAY = 86400


def _parse_float(value: str, field: str, line_number: int) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise PltParseError(f"Failed to parse {field}: {value!r}", line_number) from exc


def parse_plt(lines: Iterable[str]) -> Trajectory:
    """
    Parse the records of one .plt file

    Args:
        lines: Lines of the file, header included

    Returns:
        Points in file order

    Raises:
        PltParseError: A record is malformed or out of range
    """
    points = []

    for line_number, line in enumerate(lines, start=1):
        if line_number <= HEADER_LINES:
            continue
        line = line.strip()
        if not line:
            continue

        parts = line.split(',')
        if len(parts) != FIELD_COUNT:
            raise PltParseError(f"Invalid number of fields: expected {FIELD_COUNT}, got {len(parts)}", line_number)

        latitude = _parse_float(parts[0], 'latitude', line_number)
        longitude = _parse_float(parts[1], 'longitude', line_number)
        altitude = _parse_float(parts[3], 'altitude', line_number)
        days = _parse_float(parts[4], 'date', line_number)

        if not -90.0 <= latitude <= 90.0:
            raise PltParseError(f"Latitude out of range: {latitude}", line_number)
        if not -180.0 <= longitude <= 180.0:
            raise PltParseError(f"Longitude out of range: {longitude}", line_number)

        # Whole seconds, like the source; rounding absorbs the float noise in `days`
        seconds = round((days - EPOCH_OFFSET_DAYS) * SECONDS_PER_DAY)

        try:
            point = snap_to_grid(Point(seconds * 1000, latitude, longitude, altitude))
        except EncodingOverflow as exc:
            raise PltParseError(str(exc), line_number) from exc
        points.append(point)

    return points


def read_plt_file(path: Path) -> List[Point]:
    """Parse a single .plt file from disk."""
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        try:
            return parse_plt(f)
        except PltParseError as exc:
            error = PltParseError(f"{Path(path).name}: {exc}")
            error.line_number = exc.line_number
            raise error from exc


def load_plt_directory(path: Path) -> Tuple[Trajectory, int]:
    """
    Load every .plt file below a directory into one trajectory

    Args:
        path: Directory holding .plt files, or a single .plt file

    Returns:
        Tuple of (points sorted by timestamp, total size of the files in bytes)
    """
    path = Path(path)
    files = [path] if path.is_file() else sorted(path.glob('*.plt'))

    points: List[Point] = []
    total_size = 0
    for plt_file in files:
        total_size += plt_file.stat().st_size
        points.extend(read_plt_file(plt_file))

    # Stable: equal timestamps keep file order
    points.sort(key=lambda p: p.timestamp)
    return points, total_size
