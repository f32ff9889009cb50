"""
Module for managing Motus game constraints.
"""

from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Set, Tuple
from config import FAST_MODE

WELL_PLACED = "wellPlaced"
MISPLACED = "misplaced"
ABSENT = "absent"
STATUSES = (WELL_PLACED, MISPLACED, ABSENT)


class FeedbackCell(NamedTuple):
    letter: str
    status: str


def normalize_status(status: Optional[str], verbose: bool = False) -> str:
    """
    Map a raw status to one of STATUSES. Anything unexpected counts as absent.
    """
    if status in STATUSES:
        return status
    if verbose and not FAST_MODE:
        print(f"[WARN] Unknown feedback status {status!r}, treating it as '{ABSENT}'.")
    return ABSENT


class MotusConstraints:
    def __init__(self) -> None:
        # Letters confirmed at an exact position
        self.well_placed: Dict[int, str] = {}
        # Letters known to be present somewhere
        self.misplaced: Set[str] = set()
        # Positions where a misplaced letter was seen and is therefore not
        self.excluded_positions: Dict[str, Set[int]] = {}
        # Letters confirmed absent from the target word
        self.absent: Set[str] = set()

    @classmethod
    def from_preset(cls, preset_letters: Mapping[int, Optional[str]]) -> "MotusConstraints":
        """
        Build the initial constraints from the letters the board reveals before
        the first guess (usually the first letter). Empty cells and '.' are skipped.
        """
        constraints = cls()
        for position, letter in preset_letters.items():
            letter = (letter or "").strip().lower()
            if letter and letter != ".":
                constraints.well_placed[int(position)] = letter
        return constraints

    def known_present(self) -> Set[str]:
        return set(self.well_placed.values()) | self.misplaced

    def update_constraints(self, feedback: Iterable[Tuple[str, str]], verbose: bool = False) -> None:
        """
        Fold one attempt's feedback into the constraints.

        The feedback is read in column order. Positive evidence (well placed and
        misplaced cells) is recorded first, absent cells second, so a repeated
        letter that comes back both coloured and grey is never marked absent,
        whatever the column order.
        """
        cells: List[Tuple[int, str, str]] = []
        for position, (letter, status) in enumerate(feedback):
            letter = (letter or "").strip().lower()
            if not letter:
                continue
            cells.append((position, letter, normalize_status(status, verbose)))

        for position, letter, status in cells:
            if status == WELL_PLACED:
                self.well_placed[position] = letter
                self.absent.discard(letter)
            elif status == MISPLACED:
                self.misplaced.add(letter)
                self.absent.discard(letter)
                self.excluded_positions.setdefault(letter, set()).add(position)

        known_present = self.known_present()
        for position, letter, status in cells:
            if status == ABSENT and letter not in known_present:
                self.absent.add(letter)

    def is_word_possible(self, word: str) -> bool:
        """
        Determine if a given word is compatible with the current constraints.
        """
        # Check exact positions
        for i, letter in self.well_placed.items():
            if i >= len(word) or word[i] != letter:
                return False
        # Present letters must appear, but not where they were seen misplaced
        for letter in self.misplaced:
            if letter not in word:
                return False
            for i in self.excluded_positions.get(letter, ()):
                if i < len(word) and word[i] == letter:
                    return False
        # Should not contain any letters known to be absent
        if any(letter in word for letter in self.absent):
            return False
        return True

    def __repr__(self) -> str:
        return (f"MotusConstraints(well_placed={self.well_placed!r}, misplaced={self.misplaced!r}, "
                f"excluded_positions={self.excluded_positions!r}, absent={self.absent!r})")
