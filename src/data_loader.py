# data_loader.py

import re
import unicodedata
from collections import Counter
from typing import Iterable, List, Optional
from urllib.parse import quote

import requests

from config import FAST_MODE, REQUEST_TIMEOUT, WORD_SOURCE_URL
from constraints import ABSENT, MISPLACED, WELL_PLACED, FeedbackCell

LIGATURES = {"œ": "oe", "æ": "ae"}
ALPHABET_RE = re.compile(r"[a-z]+")


class EmptyCorpusError(ValueError):
    """No word of the required length survived normalization and filtering."""


def normalize_word(raw: str) -> Optional[str]:
    """
    Lowercase, strip accents and expand ligatures. Returns None when the result
    still holds anything other than a-z.
    """
    word = raw.strip().lower()
    for ligature, expansion in LIGATURES.items():
        word = word.replace(ligature, expansion)
    word = unicodedata.normalize("NFD", word)
    word = "".join(ch for ch in word if not unicodedata.combining(ch))
    if not ALPHABET_RE.fullmatch(word):
        return None
    return word


def build_corpus(raw_words: Iterable[str], target_length: int, blocklist: Iterable[str] = ()) -> List[str]:
    """
    Normalize the raw list into unique words of target_length that are not
    blocklisted. First occurrence order is kept, since the selector takes the
    first match.
    """
    blocked = set(blocklist)
    corpus = {}
    for raw in raw_words:
        if not raw:
            continue
        word = normalize_word(raw)
        if word is None or len(word) != target_length or word in blocked:
            continue
        corpus.setdefault(word, None)
    return list(corpus)


def load_words(file_path: str) -> List[str]:
    with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
        words = [line.strip() for line in f if line.strip()]
    if not FAST_MODE:
        print(f"[INFO] Loaded {len(words)} raw words from {file_path}.")
    return words


def fetch_raw_word_list(url: str = WORD_SOURCE_URL, proxy_prefix: Optional[str] = None,
                        timeout: float = REQUEST_TIMEOUT) -> List[str]:
    """
    Download a word list, one word per line. Raises requests.RequestException
    on network errors or a non-2xx answer.
    """
    if proxy_prefix:
        url = proxy_prefix + quote(url, safe="")
    if not FAST_MODE:
        print(f"[INFO] Downloading word list from {url} ...")
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    words = resp.text.splitlines()
    if not FAST_MODE:
        print(f"[INFO] Downloaded {len(words)} raw words.")
    return words


def get_feedback(guess: str, target: str) -> List[FeedbackCell]:
    statuses = [ABSENT] * len(guess)
    remaining = Counter()

    for i, letter in enumerate(guess):  # Well placed
        if i < len(target) and letter == target[i]:
            statuses[i] = WELL_PLACED
    for i, letter in enumerate(target):
        if i >= len(guess) or statuses[i] != WELL_PLACED:
            remaining[letter] += 1

    for i, letter in enumerate(guess):  # Misplaced
        if statuses[i] == ABSENT and remaining[letter] > 0:
            statuses[i] = MISPLACED
            remaining[letter] -= 1

    return [FeedbackCell(letter, status) for letter, status in zip(guess, statuses)]
