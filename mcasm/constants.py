from __future__ import annotations

DEFAULT_MAX_LENGTH = 128

NIBBLE_BITS = 4
