"""Drawing surfaces: each implements backends.base.DrawingSurface on top of a PDF library."""

import importlib

from chat2pdf.backends.base import DrawingSurface
from chat2pdf.errors import MissingDependencyError

__all__ = ["DrawingSurface", "REGISTRY", "get_surface"]

# name -> "module:Class"; imported on first use so a missing PDF library fails at render time
REGISTRY: dict[str, str] = {
    "pymupdf": "chat2pdf.backends.pymupdf_backend:PyMuPDFSurface",
}


def get_surface(name: str, **kwargs) -> DrawingSurface:
    """
    Return a new surface instance for the given name.

    Raises KeyError if the name is unknown and MissingDependencyError if the
    library behind it cannot be imported.
    """
    if name not in REGISTRY:
        raise KeyError(f"Unknown surface: {name}. Available: {list(REGISTRY)}")
    module_name, _, class_name = REGISTRY[name].partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise MissingDependencyError(f"PDF drawing library not loaded ({name}): {e}") from e
    return getattr(module, class_name)(**kwargs)
