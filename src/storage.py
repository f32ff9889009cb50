# src/storage.py
"""
Word sets that outlive a game: words the board refused, and words known to be
valid answers.
"""

import os
import pickle
from typing import Dict, Iterable, Optional, Set

from config import FAST_MODE


class BlocklistStore:
    def __init__(self, directory: Optional[str] = None) -> None:
        """
        Args:
            directory: Folder holding one pickle file per key. None keeps the
                       sets in memory only.
        """
        self.directory = directory
        self._memory: Dict[str, Set[str]] = {}

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.pkl")

    def load_blocklist(self, key: str) -> Set[str]:
        """
        Returns the stored set for key, or an empty set when nothing readable is there.
        """
        if self.directory is None:
            return set(self._memory.get(key, ()))

        path = self._path(key)
        if not os.path.exists(path):
            return set()
        try:
            with open(path, 'rb') as f:
                data = pickle.load(f)
        except (OSError, EOFError, pickle.UnpicklingError, AttributeError,
                ImportError, IndexError, TypeError, ValueError) as e:
            if not FAST_MODE:
                print(f"[WARN] Could not read {path} ({e}); starting from an empty set.")
            return set()
        if not isinstance(data, (set, frozenset, list, tuple)):
            return set()
        return {w for w in data if isinstance(w, str)}

    def save_blocklist(self, key: str, words: Iterable[str]) -> None:
        unique_words = set(words)
        if self.directory is None:
            self._memory[key] = unique_words
            return
        os.makedirs(self.directory, exist_ok=True)
        with open(self._path(key), 'wb') as f:
            pickle.dump(unique_words, f)

    def add_word(self, key: str, word: Optional[str]) -> None:
        if not word:
            return
        words = self.load_blocklist(key)
        if word not in words:
            words.add(word)
            self.save_blocklist(key, words)
