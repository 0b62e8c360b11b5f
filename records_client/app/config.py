# app/config.py
#
# Client configuration read from the environment once at import time.

import os
from typing import Optional

# --- Backend Location ---
# Android emulators reach the host machine through 10.0.2.2. Point this at the
# PC's LAN address when running on a real phone.
DEFAULT_BASE_URL = "http://10.0.2.2/medical_app"
BASE_URL = os.getenv("RECORDS_API_BASE_URL", DEFAULT_BASE_URL)


# --- Timeouts ---
def get_timeout() -> Optional[float]:
    """Returns the configured request timeout in seconds, or None for the httpx default."""
    raw = os.getenv("RECORDS_API_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        print(f"WARN: Ignoring invalid RECORDS_API_TIMEOUT value: {raw!r}")
        return None

TIMEOUT = get_timeout()


def normalize_base_url(base_url: str) -> str:
    return base_url.rstrip("/")
