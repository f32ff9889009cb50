# src/board.py
"""
The game board as seen by the solver: what it shows, and how guesses are typed into it.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from config import DEFAULT_MAX_ATTEMPTS
from constraints import WELL_PLACED, FeedbackCell
from data_loader import get_feedback


class BoardConfigurationError(RuntimeError):
    """The board does not look like a Motus grid (missing grid, rows or cells)."""


class GameOutcome(NamedTuple):
    won: bool
    lost: bool
    solution: Optional[str]


class MotusBoard(ABC):
    @abstractmethod
    def get_board_dimensions(self) -> Tuple[int, int]:
        """Returns (word length, max attempts). Raises BoardConfigurationError."""

    @abstractmethod
    def read_preset_letters(self) -> Dict[int, str]:
        """Letters shown in the first row before any guess, by position."""

    @abstractmethod
    def read_row_feedback(self, attempt_index: int) -> List[FeedbackCell]:
        pass

    @abstractmethod
    def read_game_outcome(self) -> GameOutcome:
        pass

    @abstractmethod
    def submit_guess(self, word: str, stop_event: Optional[threading.Event] = None) -> None:
        """Type the word letter by letter, then press enter."""

    @abstractmethod
    def wait_for_rejection(self, timeout: float, stop_event: Optional[threading.Event] = None) -> bool:
        """True if the board refused the last guess within timeout."""


class SimulatedBoard(MotusBoard):
    """
    An in-memory game against a known solution.
    """

    def __init__(self, solution: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 dictionary: Optional[Iterable[str]] = None, reveal_first_letter: bool = True) -> None:
        self.solution = solution.lower()
        self.max_attempts = max_attempts
        self.dictionary = set(dictionary) if dictionary is not None else None
        self.reveal_first_letter = reveal_first_letter
        self.rows: List[List[FeedbackCell]] = []
        self.submitted: List[str] = []
        self._rejected = False

    def get_board_dimensions(self) -> Tuple[int, int]:
        if not self.solution or self.max_attempts <= 0:
            raise BoardConfigurationError("Simulated board has no cells.")
        return len(self.solution), self.max_attempts

    def read_preset_letters(self) -> Dict[int, str]:
        return {0: self.solution[0]} if self.reveal_first_letter else {}

    def read_row_feedback(self, attempt_index: int) -> List[FeedbackCell]:
        if not 0 <= attempt_index < len(self.rows):
            raise BoardConfigurationError(f"Row {attempt_index} has not been played.")
        return list(self.rows[attempt_index])

    def _is_won(self) -> bool:
        return bool(self.rows) and all(cell.status == WELL_PLACED for cell in self.rows[-1])

    def read_game_outcome(self) -> GameOutcome:
        won = self._is_won()
        lost = not won and len(self.rows) >= self.max_attempts
        return GameOutcome(won, lost, self.solution if lost else None)

    def submit_guess(self, word: str, stop_event: Optional[threading.Event] = None) -> None:
        word = word.lower()
        self.submitted.append(word)
        if len(word) != len(self.solution) or (self.dictionary is not None and word not in self.dictionary):
            self._rejected = True
            return
        self._rejected = False
        self.rows.append(get_feedback(word, self.solution))

    def wait_for_rejection(self, timeout: float, stop_event: Optional[threading.Event] = None) -> bool:
        return self._rejected
