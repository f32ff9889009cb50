# src/web_board.py
"""
Motus board driven through a Selenium WebDriver.
"""

import re
import threading
import time
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from board import BoardConfigurationError, GameOutcome, MotusBoard
from config import (
    ALERT_ID, FAST_MODE, GRID_CLASS, KEY_DELAY, KEYBOARD_ID, KEYBOARD_SELECTOR, LOST_CLASS,
    MISPLACED_CLASS, SPECIAL_KEYS, SUBMIT_SETTLE_DELAY, WELL_PLACED_CLASS, WON_CLASS,
)
from constraints import ABSENT, MISPLACED, WELL_PLACED, FeedbackCell

LETTER_RE = re.compile(r"[a-z]")


def build_keyboard_map(driver) -> Mapping[str, WebElement]:
    """
    Read-only map from 'a'..'z', 'enter' and 'backspace' to the on-screen keys.
    """
    keys: Dict[str, WebElement] = {}
    for button in driver.find_elements(By.CSS_SELECTOR, KEYBOARD_SELECTOR):
        label = button.text.strip().lower()
        if LETTER_RE.fullmatch(label):
            keys[label] = button
    for name, element_id in SPECIAL_KEYS.items():
        found = driver.find_elements(By.ID, element_id)
        if found:
            keys[name] = found[0]
    return MappingProxyType(keys)


def _children(element: WebElement) -> List[WebElement]:
    return element.find_elements(By.XPATH, "./*")


def _classes(element: WebElement) -> List[str]:
    return (element.get_attribute("class") or "").split()


def _pause(seconds: float, stop_event: Optional[threading.Event]) -> None:
    if stop_event is not None:
        stop_event.wait(seconds)
    else:
        time.sleep(seconds)


class MotusWebBoard(MotusBoard):
    def __init__(self, driver, keyboard: Optional[Mapping[str, WebElement]] = None,
                 key_delay: float = KEY_DELAY, settle_delay: float = SUBMIT_SETTLE_DELAY,
                 verbose: bool = True) -> None:
        self.driver = driver
        self.keyboard = keyboard if keyboard is not None else build_keyboard_map(driver)
        self.key_delay = key_delay
        self.settle_delay = settle_delay
        self.verbose = verbose and not FAST_MODE

    def _grid(self) -> WebElement:
        try:
            return self.driver.find_element(By.CLASS_NAME, GRID_CLASS)
        except NoSuchElementException:
            raise BoardConfigurationError(f"Grid not found: {GRID_CLASS}")

    def _rows(self) -> List[WebElement]:
        rows = _children(self._grid())
        if not rows:
            raise BoardConfigurationError("First row is missing.")
        return rows

    def get_board_dimensions(self) -> Tuple[int, int]:
        rows = self._rows()
        length = len(_children(rows[0]))
        if length == 0:
            raise BoardConfigurationError("First row has no cells.")
        return length, len(rows)

    def read_preset_letters(self) -> Dict[int, str]:
        first_row = self._rows()[0]
        return {i: cell.text.strip().lower() for i, cell in enumerate(_children(first_row))}

    def read_row_feedback(self, attempt_index: int) -> List[FeedbackCell]:
        rows = self._rows()
        if not 0 <= attempt_index < len(rows):
            raise BoardConfigurationError(f"Row {attempt_index} not found.")

        feedback = []
        for cell in _children(rows[attempt_index]):
            letter = cell.text.strip().lower()
            inner = _children(cell)
            classes = _classes(inner[0]) if inner else []
            status = ABSENT
            if WELL_PLACED_CLASS in classes:
                status = WELL_PLACED
            elif MISPLACED_CLASS in classes:
                status = MISPLACED
            feedback.append(FeedbackCell(letter, status))
        return feedback

    def read_game_outcome(self) -> GameOutcome:
        found = self.driver.find_elements(By.ID, KEYBOARD_ID)
        if not found:
            return GameOutcome(False, False, None)
        keyboard = found[0]
        children = _children(keyboard)
        classes = _classes(children[0]) if children else []
        strong = keyboard.find_elements(By.TAG_NAME, "strong")
        solution = strong[0].text.strip() if strong else None
        return GameOutcome(WON_CLASS in classes, LOST_CLASS in classes, solution or None)

    def submit_guess(self, word: str, stop_event: Optional[threading.Event] = None) -> None:
        letters = word.lower()
        expected_length = self.get_board_dimensions()[0]
        if len(letters) != expected_length and self.verbose:
            print(f"[WARN] '{word}' does not have {expected_length} letters.")

        for letter in letters:
            if stop_event is not None and stop_event.is_set():
                return
            key = self.keyboard.get(letter)
            if key is not None:
                key.click()
            elif self.verbose:
                print(f"[WARN] No key for letter '{letter}'.")
            _pause(self.key_delay, stop_event)

        enter = self.keyboard.get("enter")
        if enter is not None:
            enter.click()
        _pause(self.settle_delay, stop_event)

    def wait_for_rejection(self, timeout: float, stop_event: Optional[threading.Event] = None) -> bool:
        found = self.driver.find_elements(By.ID, ALERT_ID)
        if not found:
            return False
        alert_box = found[0]

        def rejected_or_stopped(_driver):
            if stop_event is not None and stop_event.is_set():
                return True
            return len(_children(alert_box)) > 0

        try:
            WebDriverWait(self.driver, timeout, poll_frequency=0.05).until(rejected_or_stopped)
        except TimeoutException:
            return False
        return len(_children(alert_box)) > 0
