"""Shared utility functions for the game master."""

import random
import numpy as np
import time
from datetime import datetime
from enum import Enum
from typing import Any
import json
import hashlib


def seed_everything(seed: int) -> None:
    """Set seed for reproducibility across all random number generators."""
    random.seed(seed)
    np.random.seed(seed)


def get_timestamp() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now().isoformat()


def generate_game_id(prefix: str = "werewolf") -> str:
    """Generate a unique game ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = hashlib.md5(f"{time.time()}{random.random()}".encode()).hexdigest()[:8]
    return f"{prefix}_{timestamp}_{random_suffix}"


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """Safely dump object to JSON, handling datetime, enums and dataclasses."""

    def default_handler(o):
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Enum):
            return o.value
        if hasattr(o, "to_dict"):
            return o.to_dict()
        if hasattr(o, "__dict__"):
            return o.__dict__
        return str(o)

    return json.dumps(obj, default=default_handler, **kwargs)


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    else:
        return f"{seconds / 3600:.1f}h"
