"""
User-selected display options, set from the viewer's global variables.
"""
import math
from dataclasses import dataclass

BOX_LABEL_VAR = "box_label"
RADAR_SEQ_VAR = "radar_seq"
RADAR_RX_VAR = "radar_rx"

LABEL_MODES = ("label", "score", "label-score")
TRACK_MODE = "track"


@dataclass
class ViewerSettings:
    # "label", "score", "label-score", anything else shows track ids
    box_label: str = ""
    # "A", "B" or "" (second sequence when present)
    radar_seq: str = ""
    radar_rx: int = 0

    @property
    def label_mode(self) -> str:
        mode = self.box_label.lower()
        return mode if mode in LABEL_MODES else TRACK_MODE

    def update_from_variables(self, variables: dict) -> "ViewerSettings":
        """
        Refresh from the host's global variables; missing ones fall back to defaults.

        An rx value that is not a finite integer becomes -1, which selects no data.
        """
        label = variables.get(BOX_LABEL_VAR)
        self.box_label = "" if label is None else str(label)
        seq = variables.get(RADAR_SEQ_VAR)
        self.radar_seq = "" if seq is None else str(seq)
        self.radar_rx = _parse_rx(variables.get(RADAR_RX_VAR))
        return self


def _parse_rx(value) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    try:
        rx = float(value)
    except (TypeError, ValueError):
        return -1
    if not math.isfinite(rx) or rx != int(rx):
        return -1
    return int(rx)
