"""Reading and writing images in the scanner's raw matrix format.

A file holds one or more records, each made of:

* the 8 bytes ``IMG_INFO``;
* the row and column counts as 32-bit little-endian integers;
* a 4-byte element type code (see ``TYPE_CODES``);
* the pixel data, row by row, channels interleaved, little-endian.
"""

from __future__ import annotations

import struct
from os import PathLike
from typing import Union

import numpy as np

PathType = Union[str, "PathLike[str]"]

MAGIC = b"IMG_INFO"
_DIMS = struct.Struct("<ii")
_CODE_SIZE = 4

# (numpy dtype, channel count) -> type code written to the file.
TYPE_CODES: dict[tuple[np.dtype, int], bytes] = {
    (np.dtype(np.float32), 1): b"FL4B",
    (np.dtype(np.int32), 1): b"SI4B",
    (np.dtype(np.uint8), 1): b"UI1B",
    (np.dtype(np.uint16), 1): b"UI2B",
    (np.dtype(np.float64), 1): b"FL8B",
    (np.dtype(np.float64), 3): b"F38B",
    (np.dtype(np.float32), 3): b"F34B",
    (np.dtype(np.float64), 4): b"F48B",
    (np.dtype(np.float32), 4): b"F44B",
}
_CODE_TYPES = {code: key for key, code in TYPE_CODES.items()}


class RawImageError(RuntimeError):
    """Raised when a raw image cannot be written or read."""


def _layout(matrix: np.ndarray) -> tuple[int, int, int]:
    if matrix.ndim == 2:
        rows, cols = matrix.shape
        return rows, cols, 1
    if matrix.ndim == 3:
        rows, cols, channels = matrix.shape
        return rows, cols, channels
    raise RawImageError(
        f"a raw image must have 2 or 3 dimensions, not {matrix.ndim}"
    )


def write_mat_raw(filename: PathType, mode: str, matrix) -> None:
    """Write ``matrix`` to ``filename`` as one raw record.

    ``mode`` is ``"w"`` to replace the file or ``"a"`` to append to it.
    The matrix is ``(rows, cols)`` or ``(rows, cols, channels)``; its
    element type and channel count must be one of ``TYPE_CODES``.
    """
    if mode not in ("w", "a"):
        raise RawImageError(f"unsupported file mode {mode!r}")

    array = np.asarray(matrix)
    rows, cols, channels = _layout(array)
    code = TYPE_CODES.get((array.dtype.newbyteorder("="), channels))
    if code is None:
        raise RawImageError(
            f"unsupported element type {array.dtype} with {channels} channel(s)"
        )

    data = np.ascontiguousarray(array, dtype=array.dtype.newbyteorder("<"))
    try:
        with open(filename, mode + "b") as handle:
            handle.write(MAGIC)
            handle.write(_DIMS.pack(rows, cols))
            handle.write(code)
            handle.write(data.tobytes())
    except OSError as exc:
        raise RawImageError(f"cannot write raw image {filename}") from exc


def read_mat_raw(filename: PathType) -> list[np.ndarray]:
    """Read every record of a raw image file, in the order they were written.

    Single-channel images come back as ``(rows, cols)`` arrays and
    multi-channel ones as ``(rows, cols, channels)``.
    """
    try:
        with open(filename, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise RawImageError(f"cannot read raw image {filename}") from exc

    images: list[np.ndarray] = []
    offset = 0
    header_size = len(MAGIC) + _DIMS.size + _CODE_SIZE
    while offset < len(data):
        if len(data) < offset + header_size:
            raise RawImageError(f"truncated raw image header in {filename}")
        if data[offset : offset + len(MAGIC)] != MAGIC:
            raise RawImageError(f"missing {MAGIC.decode()} marker in {filename}")
        offset += len(MAGIC)
        rows, cols = _DIMS.unpack_from(data, offset)
        offset += _DIMS.size
        code = data[offset : offset + _CODE_SIZE]
        offset += _CODE_SIZE

        key = _CODE_TYPES.get(code)
        if key is None:
            raise RawImageError(f"unknown raw image type {code!r} in {filename}")
        if rows < 0 or cols < 0:
            raise RawImageError(f"negative raw image size in {filename}")
        dtype, channels = key
        count = rows * cols * channels
        size = count * dtype.itemsize
        if len(data) < offset + size:
            raise RawImageError(f"truncated raw image data in {filename}")

        flat = np.frombuffer(
            data, dtype=dtype.newbyteorder("<"), count=count, offset=offset
        ).astype(dtype)
        offset += size
        shape = (rows, cols) if channels == 1 else (rows, cols, channels)
        images.append(flat.reshape(shape))
    return images