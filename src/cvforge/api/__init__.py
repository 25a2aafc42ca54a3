"""HTTP surface for the render pipeline."""

from cvforge.api.app import create_app

__all__ = [
    "create_app",
]
