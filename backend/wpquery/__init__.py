"""Read-only query layer over a WordPress content database."""

__version__ = "0.1.0"
