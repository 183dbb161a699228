"""Flappy - a single-screen falling-and-flapping arcade game."""

__version__ = "0.1.0"
