"""
Partials - compose documents from reusable fragments

Partials flattens documents built from ``@include(path)`` directives into a
single file, resolving nested includes relative to each fragment and guarding
against circular references.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
