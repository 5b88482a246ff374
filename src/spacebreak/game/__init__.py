"""Gameplay: entity builders, collision response rules and the game session."""

from spacebreak.game.session import GameSession

__all__ = ["GameSession"]
