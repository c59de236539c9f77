"""Rules engine for obstacle chess: chess with mines, trap doors and walls."""

__version__ = "0.1.0"
