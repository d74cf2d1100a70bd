"""
Loadchain - compile loader use chains into build engine descriptors.

Loadchain turns a module rule's ``use`` declaration (loader paths, loader
objects with options, native ``builtin:`` loaders) into the ordered list of
use descriptors a native build engine executes.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
