# src/config.py
"""
Shared settings for the Motus solver.
"""

import os

# Silences the [INFO] chatter of the loaders and the game loop.
FAST_MODE = os.environ.get("MOTUS_FAST_MODE") == "1"

# --- Word source ---
WORD_SOURCE_URL = "https://raw.githubusercontent.com/lorenbrichter/Words/refs/heads/master/Words/fr.txt"
PROXY_PREFIX = "https://corsproxy.io/?"
REQUEST_TIMEOUT = 10

# --- Persistence ---
INVALID_WORDS_KEY = "motus_invalid_words"
VALID_WORDS_KEY = "motus_valid_words"
STORAGE_DIR = os.path.join(os.path.expanduser("~"), ".motus_solver")

# --- Input timing (seconds) ---
KEY_DELAY = 0.15
SUBMIT_SETTLE_DELAY = 4.0
VALIDATION_TIMEOUT = 0.5

# --- Offline board ---
DEFAULT_MAX_ATTEMPTS = 6

# --- Motus page ---
GRID_CLASS = "motus-grille"
KEYBOARD_ID = "keyboard"
KEYBOARD_SELECTOR = "#keyboard .touche"
SPECIAL_KEYS = {"enter": "13", "backspace": "46"}
ALERT_ID = "alert"
WON_CLASS = "alert-success"
LOST_CLASS = "alert-danger"
WELL_PLACED_CLASS = "green"
MISPLACED_CLASS = "orange"
