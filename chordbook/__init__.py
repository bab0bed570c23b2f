"""Chordbook: songbook editor with a chord transposition and diagram engine."""

__version__ = "0.1.0"
