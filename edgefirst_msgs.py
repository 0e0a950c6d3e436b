"""
Input messages (edgefirst_msgs) as received from the host, field names normalized.
"""
from dataclasses import dataclass, field

import numpy as np

from foxglove_types import Time


def _time(value) -> Time:
    if isinstance(value, Time):
        return value
    if not value:
        return Time()
    return Time(int(value.get("sec", 0)), int(value.get("nsec", value.get("nanosec", 0))))


@dataclass
class Header:
    timestamp: Time = field(default_factory=Time)
    frame_id: str = ""

    @classmethod
    def from_dict(cls, d):
        d = d or {}
        return cls(timestamp=_time(d.get("timestamp", d.get("stamp"))), frame_id=d.get("frame_id", ""))


@dataclass
class DetectTrack:
    id: str = ""
    lifetime: int = 0
    created: Time = field(default_factory=Time)

    @classmethod
    def from_dict(cls, d):
        d = d or {}
        return cls(id=d.get("id", ""), lifetime=d.get("lifetime", 0), created=_time(d.get("created")))


@dataclass
class DetectBox2D:
    """Box geometry is normalized to the frame (0..1); distance in meters, 0 when unknown."""
    center_x: float
    center_y: float
    width: float
    height: float
    label: str = ""
    score: float = 0.0
    distance: float = 0.0
    speed: float = 0.0
    track: DetectTrack = field(default_factory=DetectTrack)

    @classmethod
    def from_dict(cls, d):
        return cls(
            center_x=d["center_x"],
            center_y=d["center_y"],
            width=d["width"],
            height=d["height"],
            label=d.get("label", ""),
            score=d.get("score", 0.0),
            distance=d.get("distance", 0.0),
            speed=d.get("speed", 0.0),
            track=DetectTrack.from_dict(d.get("track")),
        )


@dataclass
class DetectBoxes2D:
    header: Header = field(default_factory=Header)
    input_timestamp: Time = field(default_factory=Time)
    model_time: Time = field(default_factory=Time)
    output_time: Time = field(default_factory=Time)
    boxes: list[DetectBox2D] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d):
        return cls(
            header=Header.from_dict(d.get("header")),
            input_timestamp=_time(d.get("inputTimestamp", d.get("input_timestamp"))),
            model_time=_time(d.get("modelTime", d.get("model_time"))),
            output_time=_time(d.get("outputTime", d.get("output_time"))),
            boxes=[DetectBox2D.from_dict(b) for b in d.get("boxes", [])],
        )


@dataclass
class Mask:
    """height x width x classes scores, one byte each, optionally zstd-compressed."""
    height: int
    width: int
    mask: bytes
    length: int = 0
    encoding: str = ""

    @classmethod
    def from_dict(cls, d):
        return cls(
            height=int(d["height"]),
            width=int(d["width"]),
            mask=bytes(d.get("mask", b"")),
            length=int(d.get("length", 0)),
            encoding=d.get("encoding", ""),
        )


@dataclass
class RadarCube:
    """Shape is [sequence, range, rx channel, doppler]; cube holds int16 amplitudes."""
    header: Header
    shape: list[int]
    cube: np.ndarray
    timestamp: int = 0
    layout: bytes = b""
    scales: list[float] = field(default_factory=list)
    is_complex: bool = False

    @classmethod
    def from_dict(cls, d):
        return cls(
            header=Header.from_dict(d.get("header")),
            shape=[int(s) for s in d.get("shape", [])],
            cube=np.asarray(d.get("cube", []), dtype=np.int16),
            timestamp=d.get("timestamp", 0),
            layout=bytes(d.get("layout", b"")),
            scales=list(d.get("scales", [])),
            is_complex=bool(d.get("is_complex", False)),
        )
