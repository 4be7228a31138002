"""Pipeline configuration from environment variables and CLI flags."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EdgeOperator(str, Enum):
    SOBEL = "sobel"
    PREWITT = "prewitt"
    ROBERTS = "roberts"
    NONE = "none"


class ThresholdMode(str, Enum):
    OTSU = "otsu"
    FIXED = "fixed"


ENV_KEYS = {
    "edge_operator": "PREPROC_EDGE_OPERATOR",
    "threshold": "PREPROC_THRESHOLD",
    "blur": "PREPROC_BLUR",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def parse_threshold(value: str) -> tuple[ThresholdMode, float]:
    """Parse ``"otsu"`` or a normalised float in [0, 1]."""
    value = value.strip().lower()
    if value == ThresholdMode.OTSU.value:
        return ThresholdMode.OTSU, 0.5
    try:
        level = float(value)
    except ValueError:
        raise ValueError(f"Threshold must be 'otsu' or a number, got {value!r}.") from None
    if not 0.0 <= level <= 1.0:
        raise ValueError(f"Threshold must lie in [0, 1], got {level}.")
    return ThresholdMode.FIXED, level


def _parse_bool(name: str, value: str) -> bool:
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise RuntimeError(f"{name} must be a boolean, got {value!r}.")


@dataclass
class PipelineConfig:
    edge_operator: EdgeOperator = EdgeOperator.SOBEL
    threshold_mode: ThresholdMode = ThresholdMode.OTSU
    fixed_threshold: float = 0.5
    blur: bool = False

    @classmethod
    def from_env(
        cls,
        edge_override: Optional[str] = None,
        threshold_override: Optional[str] = None,
        blur_override: Optional[bool] = None,
    ) -> "PipelineConfig":
        edge = edge_override or os.environ.get(ENV_KEYS["edge_operator"], "")
        try:
            edge_operator = EdgeOperator(edge.lower()) if edge else EdgeOperator.SOBEL
        except ValueError:
            choices = ", ".join(op.value for op in EdgeOperator)
            raise RuntimeError(
                f"Unknown edge operator {edge!r} "
                f"(set {ENV_KEYS['edge_operator']} to one of: {choices})."
            ) from None

        threshold = threshold_override or os.environ.get(ENV_KEYS["threshold"], "")
        try:
            mode, level = parse_threshold(threshold) if threshold else (ThresholdMode.OTSU, 0.5)
        except ValueError as e:
            raise RuntimeError(f"{e} Check {ENV_KEYS['threshold']} or --threshold.") from None

        if blur_override is not None:
            blur = blur_override
        else:
            blur = _parse_bool(ENV_KEYS["blur"], os.environ.get(ENV_KEYS["blur"], ""))

        return cls(
            edge_operator=edge_operator,
            threshold_mode=mode,
            fixed_threshold=level,
            blur=blur,
        )
