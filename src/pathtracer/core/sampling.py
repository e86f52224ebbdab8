"""Explicit random streams for Monte Carlo sampling.

Taichi's built-in ``ti.random()`` keeps hidden per-thread state, which makes
a render depend on how pixels are scheduled onto threads. Instead, every
pixel owns a 32-bit xorshift stream. The state is threaded explicitly through
each sampling function: a function receives the current state and returns
the advanced state next to its sample, so the caller decides where the
stream lives (a local in the frame kernel, a field between kernel launches).

Streams are seeded on the host from a ``numpy.random.Generator``; the same
generator seed always reproduces the same image.

Example:
    >>> import numpy as np
    >>> rng = np.random.default_rng(7)
    >>> states = make_stream_states(rng, (4, 4))
    >>> # Within a Taichi kernel:
    >>> # u, state = next_float(state)
    >>> # p, state = random_in_unit_sphere(state)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.pathtracer.core.vec3 import length_squared, vec3

# Maps the top 24 bits of a u32 state onto [0, 1)
_INV_2_24 = 1.0 / 16777216.0

# Rejection sampling gives up after this many tries and keeps the last sample
MAX_REJECTION_TRIES = 100


def resolve_generator(
    seed: int | np.random.Generator | None = None,
) -> np.random.Generator:
    """Return a numpy Generator, building one from a seed when needed.

    Args:
        seed: An existing generator (returned unchanged), an integer seed,
            or None for fresh OS entropy.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def make_stream_states(
    rng: np.random.Generator,
    shape: tuple[int, ...],
) -> npt.NDArray[np.uint32]:
    """Draw non-zero initial xorshift states.

    A zero state is a fixed point of xorshift, so states are drawn from
    [1, 2**32).

    Args:
        rng: The generator supplying the seeds.
        shape: Shape of the state array (one entry per stream).

    Returns:
        Array of uint32 states.
    """
    return rng.integers(1, 2**32, size=shape, dtype=np.uint32)


@ti.func
def xorshift32(state: ti.u32) -> ti.u32:
    """Advance a 32-bit xorshift state (Marsaglia 13/17/5)."""
    x = state
    x ^= x << 13
    x ^= x >> 17
    x ^= x << 5
    return x


@ti.func
def next_float(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Args:
        state: Current stream state (non-zero).

    Returns:
        A tuple (value, new_state).
    """
    s = xorshift32(state)
    value = ti.cast(s >> 8, ti.f32) * _INV_2_24
    return value, s


@ti.func
def random_in_unit_sphere(state: ti.u32):
    """Draw a point uniformly distributed inside the unit ball.

    Uses rejection sampling from the enclosing cube, which is unbiased over
    the ball volume.

    Args:
        state: Current stream state (non-zero).

    Returns:
        A tuple (point, new_state) where point has length < 1.
    """
    s = state
    p = vec3(0.0, 0.0, 0.0)
    found = False
    # Taichi funcs cannot break out of a loop, so finished iterations idle
    for _ in range(MAX_REJECTION_TRIES):
        if not found:
            rx, s = next_float(s)
            ry, s = next_float(s)
            rz, s = next_float(s)
            p = vec3(rx * 2.0 - 1.0, ry * 2.0 - 1.0, rz * 2.0 - 1.0)
            if length_squared(p) < 1.0:
                found = True
    return p, s
