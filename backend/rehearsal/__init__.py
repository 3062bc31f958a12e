"""Rehearsal backend: simulated conversation partners for speaking practice."""

__version__ = "0.1.0"
