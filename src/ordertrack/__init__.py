"""ordertrack - customer and supply order tracking with a validated JSON store."""

__version__ = "0.1.0"
