"""
Small vector helpers and ray-sphere intersection.

Vectors are plain 3-tuples; every helper returns a new tuple and never
touches its inputs. All spheres are centred on the planet's centre.
"""

from __future__ import annotations
import math
from typing import Optional

from .types import Vec3


def dot(a: Vec3, b: Vec3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def length(v: Vec3) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: Vec3) -> Vec3:
    n = length(v)
    return (v[0]/n, v[1]/n, v[2]/n)


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])


def scale(v: Vec3, s: float) -> Vec3:
    return (v[0]*s, v[1]*s, v[2]*s)


def vec_exp(v: Vec3) -> Vec3:
    """Element-wise exponential."""
    return (math.exp(v[0]), math.exp(v[1]), math.exp(v[2]))


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def intersect_sphere(origin: Vec3, direction: Vec3,
                     radius: float) -> Optional[float]:
    """
    Distance along a unit-direction ray to a sphere of given radius.

    Solves |p + t*d|^2 = r^2 with b = p.d, c = p.p - r^2.
    Returns None when the ray misses. The near root is returned unless it
    lies behind the origin, in which case the far root is (the origin is
    inside the sphere).
    """
    b = dot(origin, direction)
    c = dot(origin, origin) - radius * radius
    discr = b * b - c
    if discr < 0.0:
        return None
    root = math.sqrt(discr)
    t = -b - root
    if t < 0.0:
        return -b + root
    return t
