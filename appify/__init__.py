"""Appify — turn a web app configuration into standalone app descriptors."""

__version__ = "0.1.0"
