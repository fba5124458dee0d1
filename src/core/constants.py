"""Centralised tunables and magic numbers.

All numeric constants that control runtime behaviour are collected here
so they are easy to find, document, and adjust.
"""

# ---------------------------------------------------------------------------
# Cooldown timer  (src/core/cooldown.py)
# ---------------------------------------------------------------------------
COOLDOWN_MS = 10_250   # session cooldown after a successful Trigger

# ---------------------------------------------------------------------------
# Macro playback  (src/core/player.py, src/core/sequences.py)
# ---------------------------------------------------------------------------
KEY_INPUT_DELAY_MS = 20    # gap after each primitive press/release
ITEM_TAP_DELAY_MS  = 5     # tighter gap inside the item-select tap
GROUP_PAUSE_MS     = 50    # pause between key groups inside one sequence
CONFIRM_PAUSE_MS   = 100   # pause before the confirming Enter
SAY_GAP_MS         = 20    # extra pause between the two numpad taps of `say`
COMBO_PAUSE_MS     = 500   # pause between sequences of a compound macro
PASTE_PAUSE_MS     = 100   # pause before the paste-and-confirm sequence

# ---------------------------------------------------------------------------
# Render loop  (src/tui/app.py)
# ---------------------------------------------------------------------------
FRAME_MS       = 16    # idle pause between render iterations
LOG_MAX_LINES  = 6     # log entries painted under the gauge

# ---------------------------------------------------------------------------
# External resources
# ---------------------------------------------------------------------------
ID_FILE = "id.txt"     # line-oriented identifier list, read on every paste
