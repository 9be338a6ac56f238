"""
Lorenz vector field and its fixed-step integrator.

Both functions are pure: the same inputs always give the same point.
"""

from __future__ import annotations

Point3 = tuple[float, float, float]


def lorenz_derivative(p: Point3, sigma: float, beta: float, rho: float) -> Point3:
    """
    Evaluate the Lorenz vector field at a point.

    Args:
        p: (x, y, z) state
        sigma: Coupling coefficient
        beta: Damping coefficient on z
        rho: Forcing coefficient

    Returns:
        (dx, dy, dz) instantaneous derivative
    """
    x, y, z = p
    return (
        sigma * (y - x),
        x * (rho - z) - y,
        x * y - beta * z,
    )


def lorenz_integrate(p: Point3, sigma: float, beta: float, rho: float, dt: float) -> Point3:
    """Advance a point by one explicit Euler step of size dt."""
    dx, dy, dz = lorenz_derivative(p, sigma, beta, rho)
    return (p[0] + dx * dt, p[1] + dy * dt, p[2] + dz * dt)
