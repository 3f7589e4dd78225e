"""Deterministic hash and value noise for procedural shading.

This module provides the integer hash and the 1D noise functions every
shader in the package is built on. All functions are pure Taichi functions:
the same input always produces the same output, and no state is kept
between calls, so they are safe to evaluate from any number of parallel
pixel threads.

The noise is built in three layers:
    hash_u32: 32-bit multiply-add mix followed by an xorshift
    value_noise: low 16 bits of the hash mapped to [0, 1)
    fractal_noise: 5 octaves of linearly interpolated value noise

The interpolation between lattice values is deliberately linear (no
smoothstep fade curve). The shaders' banding and coastline look depends on
it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orrery.core.noise import fractal_noise
    >>> # Use fractal_noise(x) within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Linear congruential constants (Numerical Recipes)
HASH_MULTIPLIER = 1664525
HASH_INCREMENT = 1013904223
HASH_SHIFT = 16

# 16 low bits of the hash feed the noise value
VALUE_MASK = 0xFFFF
VALUE_SCALE = 1.0 / 65536.0

# Fractal noise parameters
OCTAVES = 5
BASE_AMPLITUDE = 0.5
BASE_FREQUENCY = 1.0

# Upper bound of fractal_noise: sum of 0.5^k for k = 1..OCTAVES
FRACTAL_NOISE_MAX = 1.0 - 0.5**OCTAVES


@ti.func
def hash_u32(x: ti.u32) -> ti.u32:
    """Mix a 32-bit unsigned integer.

    Computes x * 1664525 + 1013904223 (wrapping modulo 2^32) and folds the
    high half into the low half with an xorshift by 16. Not cryptographic.

    Args:
        x: The value to hash.

    Returns:
        The mixed 32-bit value.
    """
    h = x * ti.cast(HASH_MULTIPLIER, ti.u32) + ti.cast(HASH_INCREMENT, ti.u32)
    h = h ^ (h >> ti.cast(HASH_SHIFT, ti.u32))
    return h


@ti.func
def value_noise(x: ti.i32) -> ti.f32:
    """Value noise at an integer lattice point.

    Args:
        x: The lattice coordinate. Negative values are reinterpreted as
            their 32-bit two's complement pattern before hashing.

    Returns:
        A value in [0, 1).
    """
    h = hash_u32(ti.cast(x, ti.u32))
    low = h & ti.cast(VALUE_MASK, ti.u32)
    return ti.cast(low, ti.f32) * VALUE_SCALE


@ti.func
def fractal_noise(x: ti.f32) -> ti.f32:
    """Five-octave fractal value noise.

    Each octave samples value_noise at the two lattice points around
    x * frequency and interpolates linearly with the fractional part.
    Amplitude starts at 0.5 and halves each octave; frequency starts at 1.0
    and doubles.

    The result is continuous in x and lies in [0, FRACTAL_NOISE_MAX).

    Args:
        x: The sample coordinate.

    Returns:
        The accumulated noise value.
    """
    total = 0.0
    amplitude = BASE_AMPLITUDE
    frequency = BASE_FREQUENCY
    for _ in ti.static(range(OCTAVES)):
        xi = x * frequency
        cell = tm.floor(xi)
        i0 = ti.cast(cell, ti.i32)
        t = xi - cell
        v0 = value_noise(i0)
        v1 = value_noise(i0 + 1)
        total += (v0 * (1.0 - t) + v1 * t) * amplitude
        amplitude *= 0.5
        frequency *= 2.0
    return total


@ti.func
def smoothstep(edge0: ti.f32, edge1: ti.f32, x: ti.f32) -> ti.f32:
    """Hermite step from 0 at edge0 to 1 at edge1.

    Args:
        edge0: Lower edge.
        edge1: Upper edge (must differ from edge0).
        x: The value to map.

    Returns:
        0 below edge0, 1 above edge1, and a smooth cubic in between.
    """
    t = tm.clamp((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)
