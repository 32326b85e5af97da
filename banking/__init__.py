"""In-memory banking service with a JSON HTTP API, plus a tree inversion helper."""

__version__ = "0.1.0"