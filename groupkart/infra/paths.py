from pathlib import Path
from typing import Optional

from groupkart.utilities.config import DATA_DIR as _CONFIG_DATA_DIR, STORAGE_KEY

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIG_DATA_DIR).resolve()


def snapshot_file(storage_key: Optional[str] = None, data_dir: Optional[Path] = None) -> Path:
    """JSON file holding the persisted store snapshot for a storage key."""
    return Path(data_dir or DATA_DIR) / f"{storage_key or STORAGE_KEY}.json"


SNAPSHOT_FILE = snapshot_file()

__all__ = ['DATA_DIR', 'SNAPSHOT_FILE', 'snapshot_file']
