"""Hotseat Chess: a two-player, same-device chess game."""

__version__ = "0.1.0"
