"""Drone CI release tracker: production promotions counted per day."""

__version__ = "0.1.0"
