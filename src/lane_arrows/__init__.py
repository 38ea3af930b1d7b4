"""lane-arrows: automatic lane arrow distribution at road junctions."""

__version__ = "0.1.0"
