import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml
from blinker import Signal
from platformdirs import user_config_dir


logger = logging.getLogger(__name__)


CONFIG_DIR = Path(user_config_dir("glyphmath"))
CONFIG_FILE = CONFIG_DIR / "tolerances.yaml"


@dataclass(frozen=True)
class Tolerances:
    """
    Every distance and angle threshold used by the geometry code. Passed
    explicitly into the operations that compare geometry, so callers can
    tighten or loosen them per call.
    """

    # Points closer than this are the same point.
    small_distance: float = 0.001
    # Precision we may round to, or cut out points closer than.
    close_distance: float = 0.01
    # Parameter values closer than this are the same parameter.
    small_t_distance: float = 0.000001
    # Maximum angle in radians between two tangents that still join
    # smoothly.
    tangent_angle: float = 0.01
    # Relative difference allowed between curvatures at a joint.
    curvature: float = 0.01
    # Default distance under which assert_colocated snaps a handle onto its
    # point.
    handle_colocation: float = 1.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or value < 0:
                raise ValueError(
                    f"Tolerance {f.name} must be a non-negative number, "
                    f"got {value!r}"
                )

    def replace(self, **changes: float) -> "Tolerances":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tolerances":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(
                f"Ignoring unknown tolerance keys: {sorted(unknown)}"
            )
        values = {}
        for key in known & set(data):
            try:
                values[key] = float(data[key])
            except (TypeError, ValueError):
                raise ValueError(
                    f"Tolerance {key} is not a number: {data[key]!r}"
                )
        return cls(**values)


DEFAULT_TOLERANCES = Tolerances()


class ToleranceConfigManager:
    """
    Loads and saves the tolerance settings as YAML. Emits `changed` with
    the manager as sender whenever the active tolerances are replaced.
    """

    def __init__(self, filepath: Optional[Union[str, Path]] = None):
        self.filepath = Path(filepath) if filepath else CONFIG_FILE
        self.tolerances: Tolerances = DEFAULT_TOLERANCES
        self.changed = Signal()

        self.load()

    def set_tolerances(self, tolerances: Tolerances):
        if tolerances == self.tolerances:
            return
        self.tolerances = tolerances
        self.changed.send(self)

    def save(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w") as f:
            yaml.safe_dump(self.tolerances.to_dict(), f)
        logger.info(f"Saved tolerances to {self.filepath}")

    def load(self) -> Tolerances:
        if not self.filepath.exists():
            logger.debug(
                f"No tolerance file at {self.filepath}, using defaults"
            )
            self.tolerances = DEFAULT_TOLERANCES
            return self.tolerances

        with open(self.filepath, "r") as f:
            data = yaml.safe_load(f)
        if not data:
            self.tolerances = DEFAULT_TOLERANCES
            return self.tolerances
        if not isinstance(data, dict):
            raise ValueError(
                f"Tolerance file {self.filepath} must contain a mapping"
            )

        self.tolerances = Tolerances.from_dict(data)
        logger.info(f"Loaded tolerances from {self.filepath}")
        return self.tolerances
