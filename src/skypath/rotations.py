"""Passive (frame) rotation matrices."""
from __future__ import annotations

import numpy as np
from scipy.spatial.transform import Rotation


def _passive(axis: str, angle_rad: float) -> np.ndarray:
    # scipy builds active rotations; the frame rotation is the transpose
    return Rotation.from_euler(axis, float(angle_rad)).as_matrix().T


def r1(angle_rad: float) -> np.ndarray:
    """Rotate the frame about the x axis."""
    return _passive("x", angle_rad)


def r3(angle_rad: float) -> np.ndarray:
    """Rotate the frame about the z axis."""
    return _passive("z", angle_rad)


def chain(*matrices: np.ndarray) -> np.ndarray:
    """Product left to right, so the rightmost matrix applies first."""
    out = np.eye(3)
    for m in matrices:
        out = out @ m
    return out
