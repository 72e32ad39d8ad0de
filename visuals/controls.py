"""
Keyboard controls for the interactive cubesphere viewer.

The noise shader of the demo is tuned by five scalars that are nudged up and
down from the keyboard. Everything here belongs to the application shell; the
mesh pipeline never sees these values.
"""

import logging
import numpy as np
from typing import Dict, Tuple

from .camera import default_transform, to_column_major

logger = logging.getLogger(__name__)

STEP = 1.0 / 8.0
SPIN_DEGREES_PER_MS = 1.0 / 10.0

# key: (parameter, direction)
KEY_BINDINGS: Dict[str, Tuple[str, float]] = {
    "a": ("highest_dim", +1.0),
    "z": ("highest_dim", -1.0),
    "s": ("lacunarity", +1.0),
    "x": ("lacunarity", -1.0),
    "d": ("octaves", +1.0),
    "c": ("octaves", -1.0),
    "f": ("offset", +1.0),
    "v": ("offset", -1.0),
    "g": ("gain", +1.0),
    "b": ("gain", -1.0),
}

QUIT_KEY = "q"
PRINT_KEY = " "
STOP_SPIN_KEY = "."

MODIFIERS = ("shift", "ctrl", "control", "alt", "super", "cmd")


class KeyAction:
    IGNORED = "ignored"
    ADJUSTED = "adjusted"
    PRINTED = "printed"
    STOPPED_SPINNING = "stopped_spinning"
    QUIT = "quit"


class ShaderParameters:
    """Uniform block of the noise shader: transform plus five tuning scalars."""

    def __init__(self,
                 highest_dim: float = 0.0,
                 lacunarity: float = 2.5,
                 octaves: float = 10.0,
                 offset: float = -0.625,
                 gain: float = 10.0):
        self.transform = np.zeros((4, 4), dtype=np.float32)
        self.highest_dim = highest_dim
        self.lacunarity = lacunarity
        self.octaves = octaves
        self.offset = offset
        self.gain = gain

    def adjust(self, name: str, direction: float, step: float = STEP):
        setattr(self, name, getattr(self, name) + direction * step)

    def set_transform(self, matrix):
        self.transform = to_column_major(matrix)

    def scalars(self) -> Dict[str, float]:
        return {
            "highest_dim": self.highest_dim,
            "lacunarity": self.lacunarity,
            "octaves": self.octaves,
            "offset": self.offset,
            "gain": self.gain,
        }

    def __str__(self) -> str:
        values = ", ".join(f"{k}={v}" for k, v in self.scalars().items())
        return f"ShaderParameters({values})"


class ViewerState:
    """Run loop state of the viewer: running and spinning flags plus the spin angle."""

    def __init__(self, spinning: bool = True):
        self.running = True
        self.spinning = spinning
        self.angle = 0.0

    def advance(self, elapsed_seconds: float) -> float:
        if self.spinning:
            self.angle = (self.angle + elapsed_seconds * 1000.0 * SPIN_DEGREES_PER_MS) % 360.0
        return self.angle

    def transform(self):
        return default_transform(self.angle)


def split_modifiers(key: str):
    """Split a matplotlib key name such as ``ctrl+a`` into modifiers and base key."""
    if key is None:
        return (), None
    if len(key) > 1 and "+" in key:
        *modifiers, base = key.split("+")
        if base == "":
            # "ctrl++"
            base = "+"
            modifiers = modifiers[:-1]
        return tuple(modifiers), base
    if len(key) == 1 and key.isalpha() and key.isupper():
        return ("shift",), key.lower()
    return (), key


def handle_key(key: str, params: ShaderParameters, state: ViewerState) -> str:
    """
    Apply a key press to the shader parameters and viewer state.

    Parameters
    ----------
    key : str
        Key name as reported by matplotlib.
    params : ShaderParameters
        Parameters to adjust in place.
    state : ViewerState
        Viewer state to update in place.

    Returns
    -------
    str
        One of the ``KeyAction`` values.
    """
    modifiers, base = split_modifiers(key)
    if base is None or any(m in MODIFIERS for m in modifiers):
        return KeyAction.IGNORED

    if base == QUIT_KEY:
        state.running = False
        return KeyAction.QUIT
    if base in KEY_BINDINGS:
        name, direction = KEY_BINDINGS[base]
        params.adjust(name, direction)
        return KeyAction.ADJUSTED
    if base == PRINT_KEY:
        logger.info("%s", params)
        return KeyAction.PRINTED
    if base == STOP_SPIN_KEY:
        state.spinning = False
        return KeyAction.STOPPED_SPINNING
    return KeyAction.IGNORED
