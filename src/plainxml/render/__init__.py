"""XML rendering for parsed documents.

Key Components:
    Renderer: two-pass serializer with namespace prefix allocation
"""

from .renderer import Renderer

__all__ = ["Renderer"]
