"""Tessera command-line interface."""

from tessera.presentation.cli.app import app, cli

__all__ = ["app", "cli"]
