"""Saving and loading scan data and sensor trajectories."""

from __future__ import annotations

import math
import struct
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union
from xml.sax.saxutils import escape

PathType = Union[str, "PathLike[str]"]
Vec3 = Sequence[float]

_INDENT = "    "


@dataclass
class TrajectoryRecord:
    """Sensor positions and orientations read from a trajectory file."""

    positions: list[tuple[float, float, float]] = field(default_factory=list)
    rpy: list[tuple[float, float, float]] = field(default_factory=list)
    fps: Optional[float] = None
    velocity: Optional[float] = None
    fov: Optional[float] = None
    resolution: Optional[int] = None
    uncertainty: Optional[float] = None


def _num(value: float) -> str:
    return format(float(value), "g")


def _to_float32(token: str) -> float:
    """Parse a number the lenient way: anything unreadable becomes 0."""
    text = token.strip()
    if not text or "_" in text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return 0.0


def parse_vector(text: str) -> list[float]:
    """Parse a bracketed list whose commas act as separators.

    Every comma becomes a space and the text is split on single spaces,
    so each empty piece between separators reads as 0.
    """
    cleaned = text.replace("[", "").replace("]", "").replace(",", " ")
    return [_to_float32(token) for token in cleaned.split(" ")]


def parse_vector_compact(text: str) -> list[float]:
    """Parse a bracketed list written as ``a, b, c``; commas are dropped."""
    cleaned = text.replace("[", "").replace("]", "").replace(",", "")
    return [_to_float32(token) for token in cleaned.split(" ")]


def _target(path: PathType, file_name: str) -> Path:
    directory = Path(path)
    directory.mkdir(exist_ok=True)
    return Path(str(path) + file_name)


def save_data(
    path: PathType, file_name: str, frames: Sequence[Sequence[Vec3]]
) -> Path:
    """Write the points of every frame, one ``x,y,z`` point per line.

    ``file_name`` is appended to ``path`` as is; the directory is created
    if it is missing. Every frame must hold as many points as the first.
    """
    frames = [list(frame) for frame in frames]
    width = len(frames[0]) if frames else 0
    if any(len(frame) != width for frame in frames):
        raise ValueError("every frame must hold as many points as the first")

    target = _target(path, file_name)
    with open(target, "w", encoding="utf-8", newline="\n") as handle:
        for frame in frames:
            handle.write(
                "\n".join(f"{_num(p[0])},{_num(p[1])},{_num(p[2])}" for p in frame)
            )
            handle.write("\n")
    return target


def _vector_list(tag: str, item_tag: str, values: Iterable[Vec3]) -> list[str]:
    items = [
        f"{_INDENT * 2}<{item_tag}>{_num(v[0])}, {_num(v[1])}, {_num(v[2])}</{item_tag}>"
        for v in values
    ]
    if not items:
        return [f"{_INDENT}<{tag}/>"]
    return [f"{_INDENT}<{tag}>", *items, f"{_INDENT}</{tag}>"]


def _text_element(tag: str, text: str, depth: int) -> str:
    return f"{_INDENT * depth}<{tag}>{escape(text)}</{tag}>"


def _bracketed(v: Vec3) -> str:
    return f"[{_num(v[0])}, {_num(v[1])}, {_num(v[2])}]"


def save_trajectory(
    path: PathType,
    file_name: str,
    positions: Sequence[Vec3],
    rpy: Sequence[Vec3],
    fps: float,
    velocity: float,
    fov: float,
    resolution: float,
    uncertainty: float,
    complete: bool = True,
) -> Path:
    """Write a sensor trajectory as XML.

    The complete form holds every position and orientation and the scan
    settings. The short form holds a single ``Step`` from the first to the
    last position.
    """
    positions = list(positions)
    rpy = list(rpy)

    if complete:
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            "<TRAJECTORY>",
            *_vector_list("POSITION", "XYZ", positions),
            *_vector_list("RPYdata", "RPY", rpy),
            _text_element("FPS", _num(fps), 1),
            _text_element("Velocity", _num(velocity), 1),
            _text_element("FOV", _num(fov), 1),
            _text_element("Resolution", str(int(resolution)), 1),
            _text_element("Uncertainty", _num(uncertainty), 1),
            "</TRAJECTORY>",
        ]
    else:
        if not positions:
            raise ValueError("a trajectory step needs at least one position")
        lines = [
            "<Step>",
            _text_element("From", _bracketed(positions[0]), 1),
            _text_element("To", _bracketed(positions[-1]), 1),
            _text_element("Line", "[0,0,0,0]", 1),
            "</Step>",
        ]

    target = _target(path, file_name)
    with open(target, "w", encoding="utf-8", newline="\n") as handle:
        handle.write("\n".join(lines) + "\n")
    return target


def _triples(parent: Optional[ET.Element], tag: str) -> list[tuple[float, float, float]]:
    if parent is None:
        return []
    result = []
    for child in parent:
        if child.tag != tag:
            break
        values = parse_vector_compact(child.text or "")
        if len(values) < 3:
            raise ValueError(f"<{tag}> needs three values, got {child.text!r}")
        result.append((values[0], values[1], values[2]))
    return result


def _optional_number(root: ET.Element, tag: str) -> Optional[float]:
    element = root.find(tag)
    if element is None or element.text is None:
        return None
    return float(element.text.strip())


def load_trajectory(filename: PathType) -> TrajectoryRecord:
    """Read a complete trajectory file written by ``save_trajectory``."""
    try:
        root = ET.parse(filename).getroot()
    except ET.ParseError as exc:
        raise ValueError(f"cannot parse trajectory file {filename}") from exc

    resolution = _optional_number(root, "Resolution")
    return TrajectoryRecord(
        positions=_triples(root.find("POSITION"), "XYZ"),
        rpy=_triples(root.find("RPYdata"), "RPY"),
        fps=_optional_number(root, "FPS"),
        velocity=_optional_number(root, "Velocity"),
        fov=_optional_number(root, "FOV"),
        resolution=None if resolution is None else int(resolution),
        uncertainty=_optional_number(root, "Uncertainty"),
    )


def write_values(values: Iterable[float], filename: PathType) -> None:
    """Write one value per line."""
    with open(filename, "w", encoding="utf-8", newline="\n") as handle:
        for value in values:
            handle.write(_num(value) + "\n")