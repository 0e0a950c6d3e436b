"""
Output message shapes consumed by the viewer (foxglove schemas).

Field names follow the foxglove schema definitions so `to_dict` output can be
handed to a host serializer unchanged.
"""
import dataclasses
import enum
from dataclasses import dataclass, field


@dataclass
class Time:
    sec: int = 0
    nsec: int = 0


@dataclass
class Color:
    r: float
    g: float
    b: float
    a: float

    def as_tuple(self):
        return (self.r, self.g, self.b, self.a)


@dataclass
class Point2:
    x: float
    y: float


@dataclass
class Point3:
    x: float
    y: float
    z: float


@dataclass
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass
class Pose:
    position: Point3
    orientation: Quaternion = field(default_factory=Quaternion)


class PointsAnnotationType(enum.IntEnum):
    UNKNOWN = 0
    POINTS = 1
    LINE_LOOP = 2
    LINE_STRIP = 3
    LINE_LIST = 4


class LineType(enum.IntEnum):
    LINE_STRIP = 0
    LINE_LOOP = 1
    LINE_LIST = 2


@dataclass
class PointsAnnotation:
    timestamp: Time
    type: PointsAnnotationType
    points: list[Point2]
    outline_color: Color
    fill_color: Color
    thickness: float
    outline_colors: list[Color] = field(default_factory=list)


@dataclass
class TextAnnotation:
    timestamp: Time
    position: Point2
    text: str
    font_size: float
    text_color: Color
    background_color: Color


@dataclass
class ImageAnnotations:
    circles: list = field(default_factory=list)
    points: list[PointsAnnotation] = field(default_factory=list)
    texts: list[TextAnnotation] = field(default_factory=list)


@dataclass
class RawImage:
    timestamp: Time
    frame_id: str
    width: int
    height: int
    encoding: str
    step: int
    data: bytes


@dataclass
class LinePrimitive:
    type: LineType
    pose: Pose
    thickness: float
    scale_invariant: bool
    points: list[Point3]
    color: Color
    colors: list[Color] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


@dataclass
class TextPrimitive:
    pose: Pose
    billboard: bool
    font_size: float
    scale_invariant: bool
    color: Color
    text: str


@dataclass
class SceneEntity:
    timestamp: Time
    frame_id: str
    id: str
    lifetime: Time = field(default_factory=Time)
    frame_locked: bool = False
    metadata: list = field(default_factory=list)
    arrows: list = field(default_factory=list)
    cubes: list = field(default_factory=list)
    spheres: list = field(default_factory=list)
    cylinders: list = field(default_factory=list)
    lines: list[LinePrimitive] = field(default_factory=list)
    triangles: list = field(default_factory=list)
    texts: list[TextPrimitive] = field(default_factory=list)
    models: list = field(default_factory=list)


@dataclass
class SceneUpdate:
    deletions: list = field(default_factory=list)
    entities: list[SceneEntity] = field(default_factory=list)


def to_dict(message) -> dict:
    """Plain-dict view of an output message (enums become ints)."""
    def _plain(value):
        if isinstance(value, enum.Enum):
            return value.value
        if isinstance(value, dict):
            return {k: _plain(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_plain(v) for v in value]
        return value
    return _plain(dataclasses.asdict(message))
