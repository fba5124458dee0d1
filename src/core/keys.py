"""Shared key-name mappings for pynput.

Macro sequences and the input classifier speak plain key names
(``"enter"``, ``"shift_l"``, ``"kp1"``, ``"z"``).  This module is the single
place where those names meet pynput objects, in both directions.
"""
from __future__ import annotations

import sys
from typing import Any, Optional

from pynput import keyboard

# ---------------------------------------------------------------------------
# Key-name → pynput Key  (used by the player for simulated output)
# ---------------------------------------------------------------------------

SPECIAL_KEYS: dict[str, Any] = {
    "CTRL":        keyboard.Key.ctrl,
    "CTRL_L":      keyboard.Key.ctrl_l,
    "CTRL_R":      keyboard.Key.ctrl_r,
    "SHIFT":       keyboard.Key.shift,
    "SHIFT_L":     keyboard.Key.shift_l,
    "SHIFT_R":     keyboard.Key.shift_r,
    "ALT":         keyboard.Key.alt,
    "ALT_L":       keyboard.Key.alt_l,
    "ALT_R":       keyboard.Key.alt_r,
    "WIN":         keyboard.Key.cmd,
    "SUPER":       keyboard.Key.cmd,
    "ENTER":       keyboard.Key.enter,
    "RETURN":      keyboard.Key.enter,
    "SPACE":       keyboard.Key.space,
    "TAB":         keyboard.Key.tab,
    "ESC":         keyboard.Key.esc,
    "ESCAPE":      keyboard.Key.esc,
    "UP":          keyboard.Key.up,
    "DOWN":        keyboard.Key.down,
    "LEFT":        keyboard.Key.left,
    "RIGHT":       keyboard.Key.right,
    **{f"F{n}": getattr(keyboard.Key, f"f{n}") for n in range(1, 13)},
}

# ---------------------------------------------------------------------------
# Numeric keypad — pynput has no named members, so go through virtual keys
# ---------------------------------------------------------------------------

_MAC_KEYPAD_VK = (82, 83, 84, 85, 86, 87, 88, 89, 91, 92)


def _keypad_vk(digit: int) -> int:
    if sys.platform == "win32":
        return 0x60 + digit              # VK_NUMPAD0..9
    if sys.platform == "darwin":
        return _MAC_KEYPAD_VK[digit]     # kVK_ANSI_Keypad0..9
    return 0xFFB0 + digit                # X11 keysym XK_KP_0..9


KEYPAD_KEYS: dict[str, keyboard.KeyCode] = {
    f"KP{n}": keyboard.KeyCode.from_vk(_keypad_vk(n)) for n in range(10)
}

# ---------------------------------------------------------------------------
# pynput Key → key name  (used by the classifier for hook events)
# ---------------------------------------------------------------------------

KEY_NAMES: dict = {
    keyboard.Key.space:  "space",
    keyboard.Key.enter:  "enter",
    keyboard.Key.tab:    "tab",
    keyboard.Key.esc:    "esc",
    keyboard.Key.up:     "up",
    keyboard.Key.down:   "down",
    keyboard.Key.left:   "left",
    keyboard.Key.right:  "right",
    keyboard.Key.f1:  "f1",  keyboard.Key.f2:  "f2",  keyboard.Key.f3:  "f3",
    keyboard.Key.f4:  "f4",  keyboard.Key.f5:  "f5",  keyboard.Key.f6:  "f6",
    keyboard.Key.f7:  "f7",  keyboard.Key.f8:  "f8",  keyboard.Key.f9:  "f9",
    keyboard.Key.f10: "f10", keyboard.Key.f11: "f11", keyboard.Key.f12: "f12",
}

_KEYPAD_NAMES: dict[int, str] = {_keypad_vk(n): f"kp{n}" for n in range(10)}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_key(name: str) -> Optional[Any]:
    """Convert a key name to a pynput Key or KeyCode."""
    upper = name.upper()
    if upper in SPECIAL_KEYS:
        return SPECIAL_KEYS[upper]
    if upper in KEYPAD_KEYS:
        return KEYPAD_KEYS[upper]
    if len(name) == 1:
        return keyboard.KeyCode.from_char(name)
    return None


def key_name(key) -> Optional[str]:
    """Return the key name for a pynput key, or None if unsupported."""
    if key in KEY_NAMES:
        return KEY_NAMES[key]
    vk = getattr(key, "vk", None)
    if vk in _KEYPAD_NAMES:
        return _KEYPAD_NAMES[vk]
    if hasattr(key, "char") and key.char:
        return key.char.lower()
    raw = str(key).replace("Key.", "").replace("'", "")
    # Unknown virtual key code looks like "<65437>"
    return None if (not raw or raw.startswith("<")) else raw
