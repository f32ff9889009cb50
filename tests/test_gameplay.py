import threading

import pytest

from board import SimulatedBoard
from config import INVALID_WORDS_KEY, VALID_WORDS_KEY
from constraints import MotusConstraints
from data_loader import EmptyCorpusError
from gameplay import CANCELLED, EXHAUSTED, LOST, WON, play_motus, select_candidate
from storage import BlocklistStore


def make_constraints():
    constraints = MotusConstraints()
    constraints.well_placed = {0: "c"}
    constraints.misplaced = {"a"}
    constraints.excluded_positions = {"a": {2}}
    constraints.absent = {"z"}
    return constraints


# --- select_candidate ---

def test_select_candidate_takes_first_match():
    assert select_candidate(["canot", "cavez", "actor"], make_constraints()) == "canot"


def test_select_candidate_depends_on_scan_order():
    constraints = make_constraints()
    assert select_candidate(["cabot", "canot"], constraints) == "cabot"
    assert select_candidate(["canot", "cabot"], constraints) == "canot"


def test_select_candidate_skips_history():
    constraints = make_constraints()
    assert select_candidate(["canot", "cabot"], constraints, history=["canot"]) == "cabot"
    assert select_candidate(["canot"], constraints, history=["canot"]) is None


def test_select_candidate_returns_none_when_nothing_fits():
    assert select_candidate(["cavez", "actor", "crane"], make_constraints()) is None
    assert select_candidate([], MotusConstraints()) is None


def test_select_candidate_returns_only_matching_words():
    constraints = make_constraints()
    words = ["actor", "crane", "cavez", "cloud", "canot", "cabot"]
    for i in range(len(words)):
        picked = select_candidate(words[i:], constraints)
        expected = [w for w in words[i:] if constraints.is_word_possible(w)]
        assert picked == (expected[0] if expected else None)


# --- play_motus ---

WORDS = ["bidets", "balais", "bateau", "bonnet", "cheval", "maison"]


def test_wins_and_records_the_answer():
    store = BlocklistStore()
    board = SimulatedBoard("bateau")
    result = play_motus(board, WORDS, store, verbose=False)

    assert result.status == WON
    assert result.word == "bateau"
    assert result.history == ["bidets", "bateau"]
    assert result.attempts == 2
    assert store.load_blocklist(VALID_WORDS_KEY) == {"bateau"}


def test_rejected_word_does_not_use_an_attempt():
    store = BlocklistStore()
    board = SimulatedBoard("bateau", dictionary={"balais", "bateau"})
    result = play_motus(board, WORDS, store, verbose=False)

    assert result.status == WON
    assert board.submitted == ["bidets", "balais", "bateau"]
    assert result.history == ["balais", "bateau"]
    assert result.attempts == 2
    assert store.load_blocklist(INVALID_WORDS_KEY) == {"bidets"}


def test_blocklisted_words_are_never_tried():
    store = BlocklistStore()
    store.save_blocklist(INVALID_WORDS_KEY, ["bidets", "balais"])
    board = SimulatedBoard("bateau")
    result = play_motus(board, WORDS, store, verbose=False)
    assert board.submitted == ["bateau"]
    assert result.status == WON


def test_cached_answers_come_first():
    store = BlocklistStore()
    store.save_blocklist(VALID_WORDS_KEY, ["bonnet"])
    board = SimulatedBoard("bonnet")
    result = play_motus(board, WORDS, store, verbose=False)
    assert result.history == ["bonnet"]


def test_loss_records_revealed_solution():
    store = BlocklistStore()
    board = SimulatedBoard("bocaux", max_attempts=1)
    result = play_motus(board, WORDS + ["bocaux"], store, verbose=False)

    assert result.status == LOST
    assert result.word == "bocaux"
    assert result.attempts == 1
    assert result.history == ["bidets"]
    assert store.load_blocklist(VALID_WORDS_KEY) == {"bocaux"}


def test_falls_back_to_first_accepted_word():
    # After 'bidets' no word fits, so the loop replays it until attempts run out.
    store = BlocklistStore()
    board = SimulatedBoard("bocaux", max_attempts=3)
    result = play_motus(board, ["bidets", "maison"], store, verbose=False)

    assert board.submitted == ["bidets", "bidets", "bidets"]
    assert result.status == LOST
    assert result.word == "bocaux"


def test_exhausted_when_nothing_fits_and_no_history():
    store = BlocklistStore()
    board = SimulatedBoard("zygote", max_attempts=6)
    result = play_motus(board, WORDS, store, verbose=False)

    assert result.status == EXHAUSTED
    assert result.word is None
    assert result.attempts == 0
    assert board.submitted == []
    assert store.load_blocklist(VALID_WORDS_KEY) == set()
    assert store.load_blocklist(INVALID_WORDS_KEY) == set()


def test_empty_corpus_is_fatal():
    with pytest.raises(EmptyCorpusError):
        play_motus(SimulatedBoard("bateau"), ["chat", "chien"], BlocklistStore(), verbose=False)


def test_cancelled_before_first_guess():
    stop_event = threading.Event()
    stop_event.set()
    board = SimulatedBoard("bateau")
    result = play_motus(board, WORDS, BlocklistStore(), verbose=False, stop_event=stop_event)
    assert result.status == CANCELLED
    assert board.submitted == []


def test_cancelled_while_typing():
    stop_event = threading.Event()

    class StoppingBoard(SimulatedBoard):
        def submit_guess(self, word, stop_event=None):
            super().submit_guess(word, stop_event)
            stop_event.set()

    board = StoppingBoard("bateau")
    result = play_motus(board, WORDS, BlocklistStore(), verbose=False, stop_event=stop_event)
    assert result.status == CANCELLED
    assert result.history == []
    assert board.submitted == ["bidets"]


def test_cancelled_during_rejection_wait():
    stop_event = threading.Event()

    class StoppingBoard(SimulatedBoard):
        def wait_for_rejection(self, timeout, stop_event=None):
            stop_event.set()
            return False

    store = BlocklistStore()
    board = StoppingBoard("bateau")
    result = play_motus(board, ["bateau"] + WORDS, store, verbose=False, stop_event=stop_event)
    assert result.status == CANCELLED
    assert result.history == []
    assert result.attempts == 0
    assert store.load_blocklist(VALID_WORDS_KEY) == set()
    assert store.load_blocklist(INVALID_WORDS_KEY) == set()
