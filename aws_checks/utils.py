import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Union

import yaml

_NAME_SEPARATOR = re.compile(r"[,;]\s*")


def load_yaml(file_path: Union[str, Path]) -> Dict:
    with open(file_path, "r", encoding="utf-8") as file:
        data = yaml.safe_load(file)
    return data or {}


def split_names(value: str) -> List[str]:
    """Split a name list separated by ',' or ';'."""
    return [name for name in _NAME_SEPARATOR.split(value.strip()) if name]


def parse_time(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_number(value: float) -> str:
    """Render whole numbers without a fraction, others with two decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"
