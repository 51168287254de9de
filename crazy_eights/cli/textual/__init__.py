"""Textual front-end for the Crazy Eights CLI."""

from .app import CrazyEightsApp, run_textual_app

__all__ = ["CrazyEightsApp", "run_textual_app"]
