from __future__ import annotations

import logging
from typing import IO, Iterable, List

import numpy as np
import open3d as o3d

from common.parse import parse_double
from exceptions.exceptions import FileOpenError, ParseError, ResultWriteError
from .model import ClusterLabels, NOISE_LABEL, Point3D, PointSet

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = "|"
DEFAULT_SEPARATOR = " "


def open_input(path: str) -> IO[str]:
    """Open the point file for reading."""
    try:
        return open(path, "r", encoding="utf-8")
    except OSError as e:
        raise FileOpenError("INPUT_OPEN_FAILED", f"Unable to open the read file: {path} ({e.strerror})",
                            context="open_input") from e


def open_output(path: str) -> IO[str]:
    """Open (and truncate) the result file for writing."""
    try:
        return open(path, "w", encoding="utf-8")
    except OSError as e:
        raise FileOpenError("OUTPUT_OPEN_FAILED", f"Unable to open the result file: {path} ({e.strerror})",
                            context="open_output") from e


def split_fields(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split a line into fields.

    A trailing delimiter does not produce an empty last field, and a blank
    line has no fields at all.
    """
    if not line.strip():
        return []
    fields = line.rstrip("\r\n").split(delimiter)
    if fields and fields[-1] == "":
        fields.pop()
    return fields


def extract_points(
    lines: Iterable[str],
    *,
    delimiter: str = DEFAULT_DELIMITER,
    strict_lines: bool = False,
) -> PointSet:
    """Assemble a PointSet from "x|y|z" lines in a single forward pass.

    Fields are parsed in order as they are reached, so a malformed token fails
    even on a line that turns out to be short. Fields past the third are
    ignored. Lines with fewer than three fields are skipped with a warning, or
    raise ParseError when `strict_lines` is set. Bytes that are not valid
    UTF-8 raise ParseError.
    """
    points: List[Point3D] = []
    line_no = 0
    try:
        for line_no, line in enumerate(lines, start=1):
            fields = split_fields(line, delimiter)
            coords = [parse_double(token, context=f"line {line_no}") for token in fields[:3]]
            if len(coords) < 3:
                if strict_lines:
                    raise ParseError(
                        "SHORT_LINE",
                        f"Line {line_no} has {len(coords)} field(s), expected 3: {line.rstrip()!r}",
                        context="extract_points",
                    )
                logger.warning("Skipping line %d: %d field(s), expected 3", line_no, len(coords))
                continue
            points.append(Point3D(*coords))
    except UnicodeDecodeError as e:
        # text files decode in chunks, so the bad byte is at or after this line
        raise ParseError("INVALID_ENCODING", f"Input is not valid UTF-8 at or after line {line_no + 1}: {e}",
                         context=f"line {line_no + 1}") from e
    logger.debug("Extracted %d points", len(points))
    return PointSet.from_points(points)


def write_labels(labels: ClusterLabels, stream: IO[str], separator: str = DEFAULT_SEPARATOR) -> None:
    """Write labels in order, separated by `separator`, without a trailing newline."""
    try:
        stream.write(separator.join(str(label) for label in labels))
        stream.flush()
    except (OSError, ValueError) as e:
        raise ResultWriteError("WRITE_FAILED", f"Failed to write point cloud result: {e}",
                               context="write_labels") from e


def read_labels(path: str) -> ClusterLabels:
    """Read a labels file written by write_labels.

    Tokens that are not integers are read as noise.
    """
    with open(path, "r", encoding="utf-8") as f:
        tokens = f.read().split()
    labels: List[int] = []
    for token in tokens:
        try:
            labels.append(int(token))
        except ValueError:
            logger.debug("Could not convert %r to an integer, reading it as noise", token)
            labels.append(NOISE_LABEL)
    return ClusterLabels(tuple(labels))


def points_to_point_cloud(points: PointSet) -> o3d.geometry.PointCloud:
    """Build an Open3D point cloud from a PointSet, preserving order."""
    pc = o3d.geometry.PointCloud()
    pc.points = o3d.utility.Vector3dVector(np.asarray(points.as_array(), dtype=np.float64))
    return pc
