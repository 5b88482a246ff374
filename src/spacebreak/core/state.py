"""
Game flow state machine.

States:
    PLAYING: The scene runs and the paddle follows the pointer
    WON: Every brick and spaceship is down, the play-again prompt is open
    LOST: The ball got away or debris hit the paddle, the try-again prompt is open
    FINISHED: The player declined another round, the farewell alert is open
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Game flow states."""
    PLAYING = auto()
    WON = auto()
    LOST = auto()
    FINISHED = auto()


@dataclass
class StateContext:
    """What the current state is about."""
    score: int = 0
    target_score: int = 0
    reason: str | None = None   # why a round ended
    rounds: int = 1             # rounds started, including the current one


StateListener = Callable[[GameState, GameState, StateContext], None]


class StateMachine:
    """
    Tracks where the game is and who needs to know when it moves.

    Moves not listed in TRANSITIONS are refused and logged, never raised:
    a second loss reported in the same frame simply does nothing.
    """

    TRANSITIONS: Dict[GameState, FrozenSet[GameState]] = {
        GameState.PLAYING: frozenset({GameState.WON, GameState.LOST}),
        GameState.WON: frozenset({GameState.PLAYING, GameState.FINISHED}),
        GameState.LOST: frozenset({GameState.PLAYING, GameState.FINISHED}),
        GameState.FINISHED: frozenset(),
    }

    def __init__(self, initial_state: GameState = GameState.PLAYING) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: List[StateListener] = []
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    @property
    def is_playing(self) -> bool:
        return self._state == GameState.PLAYING

    @property
    def awaiting_answer(self) -> bool:
        """A round ended and the play-again prompt is waiting."""
        return self._state in (GameState.WON, GameState.LOST)

    def can_transition(self, to_state: GameState) -> bool:
        return to_state in self.TRANSITIONS[self._state]

    def transition(self, to_state: GameState, **context_updates: Any) -> bool:
        """
        Move to ``to_state`` if allowed.

        Args:
            to_state: Target state
            **context_updates: StateContext fields to set; unknown keys are ignored

        Returns:
            True if the move happened
        """
        if not self.can_transition(to_state):
            logger.warning(f"Invalid transition: {self._state.name} -> {to_state.name}")
            return False

        old_state = self._state
        self._state = to_state

        if to_state == GameState.PLAYING:
            self._context.rounds += 1
            self._context.reason = None

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: StateListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, old_state: GameState, new_state: GameState) -> None:
        for listener in list(self._listeners):
            try:
                listener(old_state, new_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
