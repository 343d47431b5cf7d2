# safeprime/config.py
# Process-wide settings, read once at import time.

import os

# Smallest bit length the public constructors accept. Not overridable.
MIN_BIT_LENGTH = 128

# Extra Miller-Rabin rounds on top of the size-derived count
EXTRA_CHECKS = max(0, int(os.getenv("SAFEPRIME_EXTRA_CHECKS", "0")))

LOG_LEVEL = os.getenv("SAFEPRIME_LOG_LEVEL", "WARNING").upper()
