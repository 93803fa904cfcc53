"""DB utilities: stable JSON serialization for TEXT columns."""
import json
from typing import Any


def json_serialize(obj: Any) -> str:
    """Stable JSON for DB TEXT columns: sort_keys, no extra whitespace."""
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
