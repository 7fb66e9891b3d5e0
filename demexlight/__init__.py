"""Lighting console core: DMX fixtures and channels, presets, selectors, sequences, actions and a session."""

__version__ = "0.1.0"