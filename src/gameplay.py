# src/gameplay.py

import threading
from typing import Iterable, List, NamedTuple, Optional, Sequence

from board import MotusBoard
from config import FAST_MODE, INVALID_WORDS_KEY, VALID_WORDS_KEY, VALIDATION_TIMEOUT
from constraints import MotusConstraints
from data_loader import EmptyCorpusError, build_corpus, normalize_word
from storage import BlocklistStore

WON = "won"
LOST = "lost"
EXHAUSTED = "exhausted"
CANCELLED = "cancelled"


class SessionResult(NamedTuple):
    status: str
    word: Optional[str]
    attempts: int
    history: List[str]


def select_candidate(words: Sequence[str], constraints: MotusConstraints,
                     history: Iterable[str] = ()) -> Optional[str]:
    """
    Return the first word, in list order, that fits the constraints and was not
    already played. None when nothing fits.
    """
    played = set(history)
    for word in words:
        if word in played:
            continue
        if constraints.is_word_possible(word):
            return word
    return None


def play_motus(board: MotusBoard, raw_words: Iterable[str], store: BlocklistStore,
               verbose: bool = True, stop_event: Optional[threading.Event] = None,
               validation_timeout: float = VALIDATION_TIMEOUT) -> SessionResult:
    """
    Play one game on the board until it is won, lost, or no word is left to try.

    Raises BoardConfigurationError when the board cannot be read and
    EmptyCorpusError when no word has the board's length.
    """
    log = verbose and not FAST_MODE
    length, max_attempts = board.get_board_dimensions()

    # Known answers go first so they are always candidates.
    valid_words = sorted(store.load_blocklist(VALID_WORDS_KEY))
    invalid_words = store.load_blocklist(INVALID_WORDS_KEY)
    words = build_corpus(valid_words + list(raw_words), length, invalid_words)
    if not words:
        raise EmptyCorpusError(f"No {length}-letter word left after filtering.")
    if log:
        print(f"[INFO] {len(words)} candidate words of {length} letters, {max_attempts} attempts.")

    constraints = MotusConstraints.from_preset(board.read_preset_letters())
    history: List[str] = []
    attempts = 0

    while attempts < max_attempts:
        if stop_event is not None and stop_event.is_set():
            if log:
                print("[INFO] Session cancelled.")
            return SessionResult(CANCELLED, None, attempts, history)

        guess = select_candidate(words, constraints, history)
        if guess is None:
            if not history:
                if log:
                    print("[ERROR] No candidate left and no previously accepted word to fall back on.")
                return SessionResult(EXHAUSTED, None, attempts, history)
            guess = history[0]
            if log:
                print(f"[WARN] No candidate left, replaying '{guess}'.")

        if log:
            print(f"[INFO] Attempt {attempts + 1}: Guess = {guess}")
        board.submit_guess(guess, stop_event)
        if stop_event is not None and stop_event.is_set():
            continue

        rejected = board.wait_for_rejection(validation_timeout, stop_event)
        if stop_event is not None and stop_event.is_set():
            continue

        if rejected:
            if log:
                print(f"[WARN] '{guess}' was refused by the board.")
            store.add_word(INVALID_WORDS_KEY, guess)
            if guess in words:
                words.remove(guess)
            if guess in history:
                history.remove(guess)
            continue

        history.append(guess)
        attempts += 1

        if board.read_game_outcome().won:
            if log:
                print(f"[INFO] Solved in {attempts} attempts!")
            store.add_word(VALID_WORDS_KEY, guess)
            return SessionResult(WON, guess, attempts, history)

        if attempts < max_attempts:
            feedback = board.read_row_feedback(attempts - 1)
            constraints.update_constraints(feedback, verbose=verbose)
            if log:
                print(f"[DEBUG] {constraints}")

    solution = board.read_game_outcome().solution
    solution = normalize_word(solution) if solution else None
    if solution:
        store.add_word(VALID_WORDS_KEY, solution)
    if log:
        print(f"[INFO] Failed to solve. The word was: {solution}")
    return SessionResult(LOST, solution, attempts, history)
