"""Elden Ring save file patcher."""

__version__ = '0.1.0'
