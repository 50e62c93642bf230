from __future__ import annotations

"""Seeded value noise and fractal sums used for every terrain layer."""

import math

# Multiplier folding the seed into the lattice hash.
SEED_SALT = 37.719


def _fract(x: float) -> float:
    return x - math.floor(x)


def _smoothstep(t: float) -> float:
    """Cubic Hermite weight 3t^2 - 2t^3."""
    return t * t * (3.0 - 2.0 * t)


def _lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b by t."""
    return a + t * (b - a)


class NoiseField:
    """
    Deterministic 2D value noise.

    Lattice corners are scrambled with a sine hash of the corner coordinates
    and the seed, then blended bilinearly with a smoothstep weight. Two fields
    built with the same seed return identical samples for identical inputs.
    """

    __slots__ = ("seed",)

    def __init__(self, seed: float = 0.0) -> None:
        self.seed = float(seed)

    def _hash(self, ix: int, iy: int) -> float:
        return _fract(math.sin(ix * 12.9898 + iy * 78.233 + self.seed * SEED_SALT) * 43758.5453123)

    def noise(self, x: float, y: float) -> float:
        """Single-octave value noise at (x, y), in [0, 1]."""
        ix = math.floor(x)
        iy = math.floor(y)
        u = _smoothstep(x - ix)
        v = _smoothstep(y - iy)

        a = self._hash(ix, iy)
        b = self._hash(ix + 1, iy)
        c = self._hash(ix, iy + 1)
        d = self._hash(ix + 1, iy + 1)

        return _lerp(_lerp(a, b, u), _lerp(c, d, u), v)

    def fbm(
        self,
        x: float,
        y: float,
        octaves: int,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
    ) -> float:
        """
        Fractal sum of ``octaves`` noise samples.

        Frequency starts at 1 and grows by ``lacunarity``; amplitude starts
        at 1 and shrinks by ``persistence``. The sum is divided by the total
        amplitude and is not clamped.
        """
        total = 0.0
        frequency = 1.0
        amplitude = 1.0
        max_amplitude = 0.0

        for _ in range(octaves):
            total += self.noise(x * frequency, y * frequency) * amplitude
            max_amplitude += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return total / max_amplitude if max_amplitude > 0 else 0.0


__all__ = ["NoiseField", "SEED_SALT"]
