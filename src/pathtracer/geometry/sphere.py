"""Sphere primitive and ray-sphere intersection.

The intersection uses the half-b form of the quadratic. With
``oc = origin - center`` the hit distances solve

    a*t^2 + 2*b*t + c = 0,  a = d.d,  b = oc.d,  c = oc.oc - r^2

so the roots are ``(-b -/+ sqrt(b^2 - a*c)) / a``. The direction ``d`` is not
assumed to be unit length, which is why ``a`` is kept.

Two conventions are specific to this renderer:

- A zero discriminant (a grazing, tangent ray) counts as a miss.
- The normal always points away from the center, even when the ray starts
  inside the sphere. There is no front-face flip because only diffuse
  surfaces are rendered.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pathtracer.geometry.sphere import Sphere, hit_sphere, vec3
    >>> # Within a Taichi kernel:
    >>> # rec = hit_sphere(ray, Sphere(center=vec3(0, 0, -1), radius=0.5), 0.0, 1e30)
"""

import taichi as ti

from src.pathtracer.core.ray import Ray, point_at
from src.pathtracer.core.vec3 import dot, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Expected positive; a radius of
            zero or less is not rejected and produces degenerate normals.
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: 1 if the ray intersected, 0 for a miss. The remaining fields
            are only meaningful when hit == 1.
        t: The ray parameter of the intersection.
        point: The world-space intersection point.
        normal: Unit normal pointing away from the sphere center.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Intersect a ray with a sphere inside the open interval (t_min, t_max).

    The nearer root is preferred; the farther root is used only when the
    nearer one falls outside the interval.

    Args:
        ray: The ray to test. Its direction need not be normalized.
        sphere: The sphere to test against.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        A HitRecord; check the hit field before reading the others.
    """
    oc = ray.origin - sphere.center

    a = dot(ray.direction, ray.direction)
    b = dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = b * b - a * c

    result = make_miss_record()

    if discriminant > 0.0:
        sqrt_d = ti.sqrt(discriminant)

        t = (-b - sqrt_d) / a
        if t <= t_min or t_max <= t:
            t = (-b + sqrt_d) / a

        if t_min < t and t < t_max:
            p = point_at(ray, t)
            result = HitRecord(
                hit=1,
                t=t,
                point=p,
                normal=(p - sphere.center) / sphere.radius,
            )

    return result


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
