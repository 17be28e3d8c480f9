"""Bit-flag sets, bounded queues, event dispatch, INI settings, keyboard and mouse input, a free-look camera and geometry helpers for a small game engine."""

__version__ = "0.1.0"