"""Declarative route sets, href building, typed route parameters and two demo sites."""

__version__ = "0.2.0"
__all__ = ["paths", "params", "routes", "demo_flat", "demo_nested"]