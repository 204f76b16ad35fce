"""Coaching lesson generation: prompt composition, AI generation, offline fallback and rendering."""

__version__ = "0.1.0"
