"""Sync KEY=VALUE secrets into Google Secret Manager from a GitHub Action."""

__version__ = "1.0.0"
