"""Gesture garden: grow a procedural garden with hand and face gestures."""

__version__ = "0.1.0"
