"""Reading ASCII and binary STL files into an indexed triangle mesh."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

Coord = tuple[float, float, float]
TriIndices = tuple[int, int, int]
PathType = Union[str, "PathLike[str]"]

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_BINARY_HEADER_SIZE = 80
_TRIANGLE = struct.Struct("<12f")
_COUNT = struct.Struct("<I")


class StlReadError(RuntimeError):
    """Raised when an STL file cannot be opened or parsed."""


@dataclass
class StlMesh:
    """Indexed triangle mesh with per-face normals and solid ranges.

    ``coords`` holds unique vertex coordinates, ``tris`` the corner indices
    of each triangle, ``normals`` one normal per face as read from the file
    and ``solids`` the triangle ranges of the solids: solid ``i`` spans
    ``solids[i]`` up to (not including) ``solids[i + 1]``.
    """

    coords: list[Coord] = field(default_factory=list)
    normals: list[Coord] = field(default_factory=list)
    tris: list[TriIndices] = field(default_factory=list)
    solids: list[int] = field(default_factory=lambda: [0, 0])

    @classmethod
    def from_file(cls, filename: PathType) -> "StlMesh":
        """Read a mesh from an ASCII or binary STL file."""
        return read_stl_file(filename)

    def num_vrts(self) -> int:
        return len(self.coords)

    def vrt_coords(self, vi: int) -> Coord:
        return self.coords[vi]

    def num_tris(self) -> int:
        return len(self.tris)

    def tri_corner_inds(self, ti: int) -> TriIndices:
        return self.tris[ti]

    def tri_corner_ind(self, ti: int, ci: int) -> int:
        return self.tris[ti][ci]

    def tri_corner_coords(self, ti: int, ci: int) -> Coord:
        return self.coords[self.tri_corner_ind(ti, ci)]

    def tri_normal(self, ti: int) -> Coord:
        return self.normals[ti]

    def num_solids(self) -> int:
        if not self.solids:
            return 0
        return len(self.solids) - 1

    def solid_tris_begin(self, si: int) -> int:
        return self.solids[si]

    def solid_tris_end(self, si: int) -> int:
        return self.solids[si + 1]


def _atof(token: str) -> float:
    """Parse the leading number of a token, yielding 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(token)
    if match is None:
        return 0.0
    return float(match.group(1))


def _remove_doubles(
    raw_coords: list[Coord], raw_tris: list[TriIndices]
) -> tuple[list[Coord], list[TriIndices]]:
    """Merge equal coordinates and drop triangles that become degenerate."""
    if not raw_coords:
        return [], []

    order = sorted(range(len(raw_coords)), key=raw_coords.__getitem__)
    unique: list[Coord] = []
    new_index = [0] * len(raw_coords)
    previous: Coord | None = None
    for original in order:
        coord = raw_coords[original]
        if previous is None or coord != previous:
            unique.append(coord)
        new_index[original] = len(unique) - 1
        previous = coord

    tris: list[TriIndices] = []
    for a, b, c in raw_tris:
        ni = (new_index[a], new_index[b], new_index[c])
        if ni[0] != ni[1] and ni[0] != ni[2] and ni[1] != ni[2]:
            tris.append(ni)
    return unique, tris


def _read_bytes(filename: PathType) -> bytes:
    try:
        with open(filename, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise StlReadError(f"Couldn't open file {filename}") from exc


def read_stl_ascii(filename: PathType) -> StlMesh:
    """Read an ASCII STL file."""
    text = _read_bytes(filename).decode("latin-1")

    raw_coords: list[Coord] = []
    raw_tris: list[TriIndices] = []
    normals: list[Coord] = []
    solids: list[int] = []
    num_face_vrts = 0

    def fail(message: str, line_no: int) -> StlReadError:
        return StlReadError(
            f"ERROR while reading from {filename}: {message} in line {line_no}"
        )

    for line_no, line in enumerate(text.split("\n"), start=1):
        tokens = line.split()
        if not tokens:
            continue
        keyword = tokens[0]
        if keyword == "vertex":
            if len(tokens) < 4:
                raise fail("vertex not specified correctly", line_no)
            raw_coords.append(
                (_atof(tokens[1]), _atof(tokens[2]), _atof(tokens[3]))
            )
            num_face_vrts += 1
        elif keyword == "facet":
            if len(tokens) < 5:
                raise fail("triangle not specified correctly", line_no)
            if tokens[1] != "normal":
                raise fail("Missing normal specifier", line_no)
            normals.append((_atof(tokens[2]), _atof(tokens[3]), _atof(tokens[4])))
            num_face_vrts = 0
        elif keyword == "outer":
            if len(tokens) < 2 or tokens[1] != "loop":
                raise fail("expecting outer loop", line_no)
        elif keyword == "endfacet":
            if num_face_vrts != 3:
                raise fail("bad number of vertices specified for face", line_no)
            n = len(raw_coords)
            raw_tris.append((n - 3, n - 2, n - 1))
        elif keyword == "solid":
            solids.append(len(raw_tris))

    solids.append(len(raw_tris))
    coords, tris = _remove_doubles(raw_coords, raw_tris)
    return StlMesh(coords=coords, normals=normals, tris=tris, solids=solids)


def read_stl_binary(filename: PathType) -> StlMesh:
    """Read a little-endian binary STL file."""
    data = _read_bytes(filename)

    if len(data) < _BINARY_HEADER_SIZE:
        raise StlReadError(
            f"Error while parsing binary stl header in file {filename}"
        )
    offset = _BINARY_HEADER_SIZE
    if len(data) < offset + _COUNT.size:
        raise StlReadError(
            f"Couldnt determine number of triangles in binary stl file {filename}"
        )
    (num_tris,) = _COUNT.unpack_from(data, offset)
    offset += _COUNT.size

    raw_coords: list[Coord] = []
    raw_tris: list[TriIndices] = []
    normals: list[Coord] = []

    for _ in range(num_tris):
        if len(data) < offset + _TRIANGLE.size:
            raise StlReadError(
                f"Error while parsing trianlge in binary stl file {filename}"
            )
        values = _TRIANGLE.unpack_from(data, offset)
        offset += _TRIANGLE.size

        normals.append(values[0:3])
        for corner in range(1, 4):
            raw_coords.append(values[corner * 3 : corner * 3 + 3])
        n = len(raw_coords)
        raw_tris.append((n - 3, n - 2, n - 1))

        if len(data) < offset + 2:
            raise StlReadError(
                "Error while parsing additional triangle data in binary stl file "
                f"{filename}"
            )
        offset += 2

    solids = [0, len(raw_tris)]
    coords, tris = _remove_doubles(raw_coords, raw_tris)
    return StlMesh(coords=coords, normals=normals, tris=tris, solids=solids)


def stl_file_has_ascii_format(filename: PathType) -> bool:
    """Tell whether the file's first word is ``solid`` (case-insensitive).

    A file that cannot be opened is reported as not ASCII.
    """
    try:
        handle = open(filename, "rb")
    except OSError:
        return False
    with handle:
        collected = b""
        while True:
            chunk = handle.read(256)
            collected += chunk
            stripped = collected.lstrip()
            if not chunk or (stripped and len(stripped.split(None, 1)) > 1):
                break
            if stripped and stripped[-1:].isspace():
                break
    words = collected.split(None, 1)
    if not words:
        return False
    return words[0].decode("latin-1").lower() == "solid"


def read_stl_file(filename: PathType) -> StlMesh:
    """Read an STL file, choosing the ASCII or binary reader by its first word."""
    if stl_file_has_ascii_format(filename):
        return read_stl_ascii(filename)
    return read_stl_binary(filename)