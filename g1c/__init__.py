"""g1c - terminal dashboard for Google Cloud Compute Engine instances."""

__version__ = "0.1.0"
