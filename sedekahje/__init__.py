"""HTTP API and seeding tool for a MongoDB-backed directory of donation-accepting institutions."""

__version__ = "0.1.0"
__all__ = ["__version__"]