"""
Zstandard runtime for compressed mask payloads.

The decompressor is initialised once, in the background, and conversions
poll `ZstdRuntime.is_ready` instead of waiting for it. A conversion that
arrives before the runtime is ready gets `DecoderNotReady` and is expected
to answer with a neutral message.
"""
import enum
import logging
import threading

import zstandard as zstd

logger = logging.getLogger(__name__)

ENCODING_ZSTD = "zstd"
ENCODING_NONE = "none"
UNCOMPRESSED_ENCODINGS = (ENCODING_NONE, "")

DICT_SIZE = 131072  # 128KB


class DecoderNotReady(RuntimeError):
    """Raised when a zstd payload arrives before the runtime finished loading."""


class UnsupportedEncoding(ValueError):
    """Raised for an encoding tag that is neither zstd nor uncompressed."""


class CorruptPayload(ValueError):
    """Raised when a zstd payload cannot be decoded."""


class DecoderState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


class ZstdRuntime:
    """
    Readiness handle around a `zstd.ZstdDecompressor`.

    Args:
        dict_path (str): Optional path to a trained dictionary (see `train_dictionary`).
    """

    def __init__(self, dict_path=None):
        self.dict_path = dict_path
        self._state = DecoderState.UNINITIALIZED
        self._decompressor = None
        self._thread = None
        self._loaded = threading.Event()

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is DecoderState.READY

    def load(self) -> DecoderState:
        """Build the decompressor synchronously and record the outcome."""
        try:
            dict_data = None
            if self.dict_path:
                with open(self.dict_path, "rb") as f:
                    dict_data = zstd.ZstdCompressionDict(f.read())
            self._decompressor = zstd.ZstdDecompressor(dict_data=dict_data)
        except (OSError, zstd.ZstdError) as e:
            self._state = DecoderState.FAILED
            logger.error("Could not load zstd: %s", e)
        else:
            self._state = DecoderState.READY
            logger.info("zstd runtime ready (dictionary=%s)", self.dict_path or "none")
        finally:
            self._loaded.set()
        return self._state

    def start(self) -> None:
        """Kick off `load()` on a daemon thread; returns immediately."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self.load, name="zstd-loader", daemon=True)
        self._thread.start()

    def wait(self, timeout=None) -> bool:
        """Block until loading finished. For hosts and tests, never for conversions."""
        self._loaded.wait(timeout)
        return self.is_ready

    def decompress(self, buffer, encoding: str) -> bytes:
        """
        Return the raw payload for `buffer` given its encoding tag.

        Args:
            buffer (bytes-like): Payload as received in the message.
            encoding (str): "zstd", "none" or "" (uncompressed).

        Returns:
            bytes: Decompressed (or untouched) payload.

        Raises:
            DecoderNotReady: zstd payload while the runtime is not READY.
            UnsupportedEncoding: any other encoding tag.
            CorruptPayload: the zstd frame is invalid or truncated.
        """
        if encoding in UNCOMPRESSED_ENCODINGS:
            return buffer
        if encoding != ENCODING_ZSTD:
            raise UnsupportedEncoding(f"Unsupported payload encoding: {encoding!r}")
        if not self.is_ready:
            raise DecoderNotReady(f"zstd runtime is {self._state.value}")
        # decompressobj copes with frames that omit the content size
        dobj = self._decompressor.decompressobj()
        try:
            data = dobj.decompress(bytes(buffer))
        except zstd.ZstdError as e:
            raise CorruptPayload(f"Invalid zstd payload: {e}") from e
        if not dobj.eof:
            raise CorruptPayload(f"Truncated zstd frame: {len(buffer)} bytes, {len(data)} decoded")
        return data


_default_runtime = None
_default_lock = threading.Lock()


def default_runtime(dict_path=None) -> ZstdRuntime:
    """
    Process-wide runtime, started on first use.

    `dict_path` only takes effect on the call that creates the runtime.
    """
    global _default_runtime
    with _default_lock:
        if _default_runtime is None:
            _default_runtime = ZstdRuntime(dict_path=dict_path)
            _default_runtime.start()
    return _default_runtime


def compress(data: bytes, level: int = 3, dict_data=None) -> bytes:
    """Compress a payload the way the publishers do (one frame, content size written)."""
    return zstd.ZstdCompressor(level=level, dict_data=dict_data).compress(data)


def train_dictionary(samples, dict_size: int = DICT_SIZE) -> bytes:
    """
    Train a zstd dictionary from recorded mask payloads.

    Args:
        samples (list[bytes]): Raw (uncompressed) payloads.
        dict_size (int): Target dictionary size in bytes.

    Returns:
        bytes: Dictionary content, loadable through `ZstdRuntime(dict_path=...)`.
    """
    if not samples:
        raise ValueError("No samples to train a dictionary from")
    if len(samples) < 100:
        logger.warning("Only %d samples. Collect more for better results.", len(samples))
    return zstd.train_dictionary(dict_size, samples).as_bytes()
