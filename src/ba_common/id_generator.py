"""Purchase receipt ids: ``tx_<unix ms>_<12 hex chars>``.

The millisecond prefix keeps ids roughly time-ordered when eyeballing logs;
uniqueness comes from the random suffix. Receipts are ordered by their
timestamp column, never by id.
"""

import time
import uuid


def generate_tx_id() -> str:
    return f"tx_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"
