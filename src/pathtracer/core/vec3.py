"""Three-component vector algebra for single-precision ray tracing.

Points, directions and colors all share the same ``vec3`` type from
``taichi.math``. Taichi vectors already overload ``+``, ``-``, unary ``-``,
element-wise ``*`` (Hadamard product) and scalar ``*``/``/`` together with
their in-place forms, so this module only adds the named operations used
throughout the renderer.

All functions are ``@ti.func`` and compute in ``f32``. ``unit_vector`` on the
zero vector divides by zero and yields NaN components; callers must not pass
it a zero-length vector.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pathtracer.core.vec3 import vec3, dot, unit_vector
    >>> @ti.kernel
    ... def k() -> ti.f32:
    ...     return dot(unit_vector(vec3(3.0, 4.0, 0.0)), vec3(1.0, 0.0, 0.0))
    >>> k()  # 0.6
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b.

    Follows the right-handed convention so that cross(x, y) == z.
    """
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared Euclidean length of a vector."""
    return dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Unlike ``tm.normalize`` there is no epsilon guard: a zero-length input
    produces NaN components.
    """
    return v / length(v)


@ti.func
def sqrt_components(v: vec3) -> vec3:
    """Apply the square root to each component.

    Used for the gamma-2 encoding of averaged radiance.
    """
    return vec3(ti.sqrt(v.x), ti.sqrt(v.y), ti.sqrt(v.z))


@ti.func
def hadamard(a: vec3, b: vec3) -> vec3:
    """Component-wise product of two vectors (color modulation)."""
    return vec3(a.x * b.x, a.y * b.y, a.z * b.z)


@ti.func
def lerp(a: vec3, b: vec3, t: ti.f32) -> vec3:
    """Linearly interpolate from a (t=0) to b (t=1)."""
    return a * (1.0 - t) + b * t
