"""Coherent noise primitives on numpy arrays.

``hash_lattice`` is the only place integer hashing happens. Anything matching
``NoiseFunction`` can be handed to ``fbm`` in place of ``value_noise``.
"""

from collections.abc import Callable

import numpy as np

NoiseFunction = Callable[[np.ndarray, np.ndarray, int], np.ndarray]

_PRIME_X = np.uint32(0x27D4EB2D)
_PRIME_Y = np.uint32(0x165667B1)
_MIX_1 = np.uint32(0x2C1B3C6D)
_MIX_2 = np.uint32(0x297A2D39)
_OCTAVE_SEED_STEP = 1013
_U32_MAX = float(0xFFFFFFFF)


def hash_lattice(ix: np.ndarray, iy: np.ndarray, seed: int) -> np.ndarray:
    """Integer hash of lattice coordinates. Returns uint32 values."""
    h = ix.astype(np.uint32) * _PRIME_X
    h ^= iy.astype(np.uint32) * _PRIME_Y
    h ^= np.uint32(seed & 0xFFFFFFFF)
    h ^= h >> np.uint32(15)
    h *= _MIX_1
    h ^= h >> np.uint32(12)
    h *= _MIX_2
    h ^= h >> np.uint32(15)
    return h


def _lattice_value(ix: np.ndarray, iy: np.ndarray, seed: int) -> np.ndarray:
    return hash_lattice(ix, iy, seed) / _U32_MAX


def value_noise(x: np.ndarray, y: np.ndarray, seed: int) -> np.ndarray:
    """Smoothstep-interpolated lattice noise in [0, 1]."""
    x0 = np.floor(x)
    y0 = np.floor(y)
    fx = x - x0
    fy = y - y0
    ix = x0.astype(np.int64)
    iy = y0.astype(np.int64)

    sx = fx * fx * (3.0 - 2.0 * fx)
    sy = fy * fy * (3.0 - 2.0 * fy)

    v00 = _lattice_value(ix, iy, seed)
    v10 = _lattice_value(ix + 1, iy, seed)
    v01 = _lattice_value(ix, iy + 1, seed)
    v11 = _lattice_value(ix + 1, iy + 1, seed)

    top = v00 + (v10 - v00) * sx
    bottom = v01 + (v11 - v01) * sx
    return top + (bottom - top) * sy


def fbm(
    x: np.ndarray,
    y: np.ndarray,
    seed: int,
    octaves: int,
    noise: NoiseFunction = value_noise,
) -> np.ndarray:
    """Fractal sum of ``octaves`` noise layers, normalised to [0, 1].

    Each octave doubles the frequency and halves the amplitude of the one
    before it, and uses its own seed so layers do not align.
    """
    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amplitude = 1.0
    frequency = 1.0
    norm = 0.0
    for octave in range(octaves):
        total += amplitude * noise(x * frequency, y * frequency, seed + octave * _OCTAVE_SEED_STEP)
        norm += amplitude
        amplitude *= 0.5
        frequency *= 2.0
    return total / norm


def ridged(field: np.ndarray) -> np.ndarray:
    """Fold a [0, 1] field so mid-values become sharp ridges near 1."""
    return 1.0 - np.abs(2.0 * field - 1.0)


def seed_offset(seed: int) -> tuple[float, float]:
    """Per-seed domain shift so different seeds sample different regions."""
    h = hash_lattice(np.array([seed], dtype=np.int64), np.array([seed >> 16], dtype=np.int64), 0x5EED)
    value = int(h[0])
    return (value & 0xFFFF) / 97.0, (value >> 16) / 89.0
