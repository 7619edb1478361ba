"""Release-set resolution and release workflow tooling for multi-module SDKs."""

__version__ = "0.1.0"
