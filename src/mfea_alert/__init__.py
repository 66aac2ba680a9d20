"""
MFEA ALERT - Market-Timing Allocation Monitor

Answers one question per run:
"Has the recommended MFEA allocation changed since the last run?"

Design Principles:
- One metrics snapshot per run, no cached state in memory
- Deterministic decision tree, strict and banded
- Banded (hysteresis) result drives notifications
- All cross-run truth lives in the state store
- Storage and notification failures degrade, never abort
"""

__version__ = "1.0.0"
