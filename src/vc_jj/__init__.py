"""vc-jj - Jujutsu backend for generic editor version-control layers."""

__version__ = "0.3.0"
