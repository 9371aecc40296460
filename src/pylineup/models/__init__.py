"""Canonical roster models."""

from .player import OUT, FieldedPlayer, Gender, Player

__all__ = ["OUT", "FieldedPlayer", "Gender", "Player"]
