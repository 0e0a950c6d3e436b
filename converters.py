"""
Message converters: edgefirst_msgs in, foxglove primitives out.

Every converter returns a well-formed message. Failures (decoder still
loading, unsupported encoding, malformed payload) are logged and answered
with a neutral message so one bad message does not stop a live stream.
"""
import logging

import numpy as np

from box_annotations import box_billboard, box_outline, box_text, box_to_color_label, box_wireframe
from edgefirst_msgs import DetectBoxes2D, Header, Mask, RadarCube
from foxglove_types import ImageAnnotations, RawImage, SceneEntity, SceneUpdate, Time
from log_setup import configure_logging
from mask_contours import masks_to_annotations, sentinel_annotation
from mask_decode import binary_masks, rasterize, render_rgba
from radar_cube import CubeShape, pack_mono16, slice_cube
from viewer_settings import ViewerSettings
from zstd_runtime import CorruptPayload, DecoderNotReady, UnsupportedEncoding, default_runtime

logger = logging.getLogger(__name__)


def activate(log_level=None, log_file=None, dict_path=None):
    """
    Host entry point: set up logging and start loading the process-wide decoder.

    Call once when the host loads the converters. Returns immediately; mask
    conversions answer with neutral messages until the decoder is ready.

    Args:
        log_level: Root log level (name or constant). Logging is left to the
            host when None.
        log_file (str): Optional log file, only used with `log_level`.
        dict_path (str): Optional trained zstd dictionary for mask payloads.

    Returns:
        ZstdRuntime: The process-wide runtime.
    """
    if log_level is not None:
        configure_logging(log_level, log_file)
    runtime = default_runtime(dict_path)
    logger.info("Converters activated (zstd runtime %s)", runtime.state.value)
    return runtime


def detect_to_image_annotations(msg: DetectBoxes2D, settings: ViewerSettings) -> ImageAnnotations:
    """Outline and caption every box on the 1920x1080 frame."""
    annotations = ImageAnnotations()
    try:
        for box in msg.boxes:
            color, label = box_to_color_label(box, settings.label_mode)
            annotations.points.append(box_outline(box, color, msg.input_timestamp))
            annotations.texts.append(box_text(box, color, label, msg.input_timestamp))
    except Exception as e:
        logger.warning("Detect -> ImageAnnotations failed: %s", e, exc_info=True)
        return ImageAnnotations()
    return annotations


def detect_to_scene_update(msg: DetectBoxes2D, settings: ViewerSettings) -> SceneUpdate:
    """
    One scene entity with a wireframe and a billboard per box that has a distance.
    """
    entity = SceneEntity(
        timestamp=msg.input_timestamp,
        frame_id=msg.header.frame_id,
        id=msg.header.frame_id,
    )
    try:
        for box in msg.boxes:
            if box.distance == 0:
                continue
            color, label = box_to_color_label(box, settings.label_mode)
            entity.lines.append(box_wireframe(box, color))
            entity.texts.append(box_billboard(box, color, label))
    except Exception as e:
        logger.warning("Detect -> SceneUpdate failed: %s", e, exc_info=True)
        entity.lines, entity.texts = [], []
    return SceneUpdate(entities=[entity])


def _decode_mask(msg: Mask, runtime):
    runtime = runtime or default_runtime()
    try:
        return runtime.decompress(msg.mask, msg.encoding)
    except DecoderNotReady as e:
        logger.debug("Skipping mask: %s", e)
    except (UnsupportedEncoding, CorruptPayload) as e:
        logger.warning("Skipping mask: %s", e)
    return None


def mask_to_raw_image(msg: Mask, runtime=None) -> RawImage:
    """
    Class argmax of a mask rendered as an rgba8 image.

    Args:
        msg (Mask): Scores, possibly zstd-compressed.
        runtime (ZstdRuntime): Decompressor; the process-wide one when None.

    Returns:
        RawImage: rgba8, all zeros when the payload could not be decoded.
    """
    width, height = max(msg.width, 0), max(msg.height, 0)
    image = RawImage(
        timestamp=Time(),
        frame_id="",
        width=width,
        height=height,
        encoding="rgba8",
        step=4 * width,
        data=bytes(height * width * 4),
    )
    payload = _decode_mask(msg, runtime)
    if payload is None:
        return image
    try:
        image.data = render_rgba(rasterize(payload, height, width)).tobytes()
    except Exception as e:
        logger.warning("Mask -> RawImage failed: %s", e, exc_info=True)
    return image


def mask_to_image_annotations(msg: Mask, runtime=None, epsilon=None) -> ImageAnnotations:
    """
    Outline of every class region (background excluded), projected to 1920x1080.

    The result always ends with the transparent sentinel point, and holds only
    that point when the payload could not be decoded.
    """
    payload = _decode_mask(msg, runtime)
    if payload is None:
        return ImageAnnotations(points=[sentinel_annotation()])
    try:
        raster = rasterize(payload, msg.height, msg.width)
        return masks_to_annotations(binary_masks(raster), msg.width, msg.height, epsilon=epsilon)
    except Exception as e:
        logger.warning("Mask -> ImageAnnotations failed: %s", e, exc_info=True)
        return ImageAnnotations(points=[sentinel_annotation()])


def radar_cube_to_raw_image(msg: RadarCube, settings: ViewerSettings) -> RawImage:
    """
    Selected (sequence, rx) slice of a radar cube as a big-endian mono16 image.

    A cube whose shape cannot be read gives a 0x0 image; any later failure
    gives a zero-filled image of the cube's height and width.
    """
    header = msg.header or Header()
    image = RawImage(
        timestamp=header.timestamp,
        frame_id=header.frame_id,
        width=0,
        height=0,
        encoding="mono16",
        step=0,
        data=b"",
    )
    try:
        dims = CubeShape.from_sequence(msg.shape)
        image.width, image.height = max(dims.width, 0), max(dims.height, 0)
        image.step = 2 * image.width
        image.data = bytes(image.width * image.height * 2)
        _, values = slice_cube(msg.cube, dims, settings.radar_seq, settings.radar_rx)
        image.data = pack_mono16(values)
    except Exception as e:
        logger.warning("RadarCube -> RawImage failed: %s", e, exc_info=True)
    return image


# Example usage with a synthetic two-class mask
if __name__ == "__main__":
    import cv2

    from zstd_runtime import compress

    runtime = activate("DEBUG")
    runtime.wait(timeout=10)

    h, w = 60, 80
    scores = np.zeros((h, w, 2), dtype=np.uint8)
    scores[..., 0] = 50
    cv2.circle(scores[..., 1], (40, 30), 20, 200, -1)
    cv2.circle(scores[..., 1], (40, 30), 8, 0, -1)
    msg = Mask(height=h, width=w, mask=compress(scores.tobytes()), encoding="zstd")

    rgba = mask_to_raw_image(msg, runtime)
    annotations = mask_to_image_annotations(msg, runtime)
    print(f"{len(annotations.points) - 1} contours traced")

    canvas = np.zeros((1080, 1920, 3), dtype=np.uint8)
    for p in annotations.points[:-1]:
        pts = np.array([[pt.x, pt.y] for pt in p.points], dtype=np.int32).reshape(-1, 1, 2)
        cv2.polylines(canvas, [pts], True, (255, 255, 255), p.thickness)
    img = np.frombuffer(rgba.data, dtype=np.uint8).reshape(h, w, 4)
    cv2.imshow("Mask (rgba8)", cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA))
    cv2.imshow("Mask contours", canvas)
    cv2.waitKey(0)
    cv2.destroyAllWindows()
