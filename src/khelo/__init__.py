"""Khelo chess: rules engine, minimax AI and game orchestration."""

__version__ = "0.1.0"
