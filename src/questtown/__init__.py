"""Quest Town: a small life-quest game built around a single save record."""

__version__ = "0.1.0"
