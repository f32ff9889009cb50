import pickle

from config import INVALID_WORDS_KEY, VALID_WORDS_KEY
from storage import BlocklistStore


def test_missing_file_loads_empty(tmp_path):
    store = BlocklistStore(str(tmp_path / "store"))
    assert store.load_blocklist(INVALID_WORDS_KEY) == set()


def test_save_and_load_deduplicates(tmp_path):
    store = BlocklistStore(str(tmp_path / "store"))
    store.save_blocklist(INVALID_WORDS_KEY, ["zzzzz", "xyzzy", "zzzzz"])
    assert store.load_blocklist(INVALID_WORDS_KEY) == {"zzzzz", "xyzzy"}
    assert store.load_blocklist(VALID_WORDS_KEY) == set()
    # survives a new store on the same folder
    assert BlocklistStore(str(tmp_path / "store")).load_blocklist(INVALID_WORDS_KEY) == {"zzzzz", "xyzzy"}


def test_add_word_skips_none_and_duplicates(tmp_path):
    store = BlocklistStore(str(tmp_path))
    store.add_word(VALID_WORDS_KEY, "maison")
    store.add_word(VALID_WORDS_KEY, "maison")
    store.add_word(VALID_WORDS_KEY, None)
    store.add_word(VALID_WORDS_KEY, "")
    assert store.load_blocklist(VALID_WORDS_KEY) == {"maison"}


def test_corrupt_file_loads_empty(tmp_path):
    (tmp_path / f"{INVALID_WORDS_KEY}.pkl").write_bytes(b"not a pickle at all")
    store = BlocklistStore(str(tmp_path))
    assert store.load_blocklist(INVALID_WORDS_KEY) == set()


def test_unexpected_payload_loads_empty(tmp_path):
    with open(tmp_path / f"{VALID_WORDS_KEY}.pkl", "wb") as f:
        pickle.dump({"not": "a set"}, f)
    store = BlocklistStore(str(tmp_path))
    assert store.load_blocklist(VALID_WORDS_KEY) == set()


def test_memory_store_returns_copies():
    store = BlocklistStore()
    store.add_word(INVALID_WORDS_KEY, "abcde")
    loaded = store.load_blocklist(INVALID_WORDS_KEY)
    loaded.add("other")
    assert store.load_blocklist(INVALID_WORDS_KEY) == {"abcde"}
