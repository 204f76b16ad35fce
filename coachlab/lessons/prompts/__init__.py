"""Versioned prompt templates for lesson generation."""
