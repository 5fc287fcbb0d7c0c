"""
Command planning for buildmatrix.

Renders the cargo invocations implied by a resolution. Nothing is executed.
"""

from .cargo import CargoInvocation, CargoPlanner, capi_features, plan

__all__ = ["CargoInvocation", "CargoPlanner", "capi_features", "plan"]
