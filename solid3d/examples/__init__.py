"""solid3d.examples — example 3D geometry assemblies.

Implemented assemblies
----------------------
:func:`RocketAssembly`
    Parametric rocket with body, nose cone, and fins.
"""

from .rocket_assembly import RocketAssembly

__all__ = ["RocketAssembly"]
