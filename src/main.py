"""
Main entry point for the Motus solver.
Handles playing on the web page, offline games, and offline testing.
"""

import argparse
import random
import sys
from multiprocessing import Pool
from typing import List, Optional

import requests
from tqdm import tqdm

from board import BoardConfigurationError, SimulatedBoard
from config import DEFAULT_MAX_ATTEMPTS, FAST_MODE, PROXY_PREFIX, STORAGE_DIR, WORD_SOURCE_URL
from data_loader import EmptyCorpusError, build_corpus, fetch_raw_word_list, load_words, normalize_word
from gameplay import WON, play_motus
from storage import BlocklistStore

# Global variables for multiprocessing workers.
GLOBAL_WORDS = None
GLOBAL_MAX_ATTEMPTS = None


def get_raw_words(args: argparse.Namespace) -> List[str]:
    if args.words_file:
        return load_words(args.words_file)
    proxy = PROXY_PREFIX if args.proxy else None
    return fetch_raw_word_list(args.url_words, proxy_prefix=proxy)


def get_store(args: argparse.Namespace) -> BlocklistStore:
    return BlocklistStore(None if args.no_store else args.store_dir)


def run_play(args: argparse.Namespace, raw_words: List[str]) -> int:
    if not args.url:
        print("[ERROR] Please provide the game page using --url")
        return 2

    import selenium.webdriver
    from web_board import MotusWebBoard

    store = get_store(args)
    driver = selenium.webdriver.Firefox()
    try:
        driver.get(args.url)
        for game_idx in range(args.games):
            if game_idx > 0:
                driver.refresh()
            board = MotusWebBoard(driver)
            result = play_motus(board, raw_words, store)
            print(f"[INFO] Game {game_idx + 1}: {result.status} ({result.word}) in {result.attempts} attempts.")
    finally:
        driver.quit()
    return 0


def run_simulate(args: argparse.Namespace, raw_words: List[str]) -> int:
    if not args.game:
        print("[ERROR] Please provide a target word using --game")
        return 2

    target_word = normalize_word(args.game)
    if not target_word:
        print("[ERROR] Please provide a valid target word.")
        return 2

    board = SimulatedBoard(target_word, max_attempts=args.max_attempts)
    result = play_motus(board, raw_words, get_store(args))
    print(f"[INFO] {result.status}: {' -> '.join(result.history)}")
    return 0 if result.status == WON else 1


# --- Multiprocessing Helpers for Parallel Test Mode ---

def init_worker(words, max_attempts):
    global GLOBAL_WORDS, GLOBAL_MAX_ATTEMPTS
    GLOBAL_WORDS = words
    GLOBAL_MAX_ATTEMPTS = max_attempts


def simulate_game(target_word):
    """
    Worker function that plays one offline game. Returns (target_word, result).
    """
    board = SimulatedBoard(target_word, max_attempts=GLOBAL_MAX_ATTEMPTS)
    result = play_motus(board, GLOBAL_WORDS, BlocklistStore(), verbose=False)
    return target_word, result


def run_test(args: argparse.Namespace, raw_words: List[str]) -> int:
    words = build_corpus(raw_words, args.length)
    if not words:
        print(f"[ERROR] No {args.length}-letter words in the word list.")
        return 1

    if len(words) > args.sample:
        sampled_solutions = random.sample(words, args.sample)
    else:
        sampled_solutions = words

    total_words = len(sampled_solutions)
    print(f"[INFO] Starting parallel testing over a random sample of {total_words} words...")

    if args.workers > 1:
        with Pool(processes=args.workers, initializer=init_worker, initargs=(words, args.max_attempts)) as pool:
            results = list(tqdm(pool.imap(simulate_game, sampled_solutions), total=total_words,
                                desc="Testing Progress"))
    else:
        init_worker(words, args.max_attempts)
        results = [simulate_game(target) for target in tqdm(sampled_solutions, desc="Testing Progress")]

    solved = [result for _, result in results if result.status == WON]
    total_attempts = sum(result.attempts for result in solved)
    failed = [target for target, result in results if result.status != WON]

    print("\n[RESULTS]")
    print(f"Total Words Tested: {total_words}")
    print(f"Words Solved: {len(solved)}")
    print(f"Accuracy: {len(solved) / total_words * 100:.2f}%")
    if solved:
        print(f"Average Attempts (solved): {total_attempts / len(solved):.2f}")
    if failed and not FAST_MODE:
        print(f"Failed words: {failed[:20]}")
    return 0


# --- Main Entry ---
def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Motus solver (first-match constraint filtering)")
    parser.add_argument(
        "--mode", type=str, choices=["play", "simulate", "test"], default="simulate",
        help="Mode to run: play, simulate, or test."
    )
    parser.add_argument("--url", type=str, help="Game page to play on (required for 'play' mode).")
    parser.add_argument("--games", type=int, default=1, help="Number of games to play in 'play' mode.")
    parser.add_argument("--game", type=str, help="Target word for 'simulate' mode.")
    parser.add_argument("--length", type=int, default=6, help="Word length for 'test' mode.")
    parser.add_argument("--sample", type=int, default=1000, help="Number of target words in 'test' mode.")
    parser.add_argument("--workers", type=int, default=8, help="Worker processes in 'test' mode.")
    parser.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS,
                        help="Attempts per offline game.")
    parser.add_argument("--words-file", type=str, help="Local word list instead of downloading one.")
    parser.add_argument("--url-words", type=str, default=WORD_SOURCE_URL, help="Word list to download.")
    parser.add_argument("--proxy", action="store_true", help="Download the word list through the CORS proxy.")
    parser.add_argument("--store-dir", type=str, default=STORAGE_DIR, help="Where the word blocklists live.")
    parser.add_argument("--no-store", action="store_true", help="Keep the blocklists in memory only.")
    args = parser.parse_args(argv)

    try:
        raw_words = get_raw_words(args)
    except (OSError, requests.RequestException) as e:
        print(f"[ERROR] Could not load the word list: {e}")
        return 1

    try:
        if args.mode == "play":
            return run_play(args, raw_words)
        elif args.mode == "simulate":
            return run_simulate(args, raw_words)
        return run_test(args, raw_words)
    except (BoardConfigurationError, EmptyCorpusError) as e:
        print(f"[ERROR] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
