"""Configuration management for the GroupKart application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Persistence
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('GROUPKART_DATA_DIR', str(BASE_DIR / 'data')))
STORAGE_KEY: Final[str] = os.getenv('GROUPKART_STORAGE_KEY', 'groupkart-storage')

# Smart swap rule: items above the threshold get a store-brand suggestion at price * factor
SWAP_PRICE_THRESHOLD: Final[float] = float(os.getenv('SWAP_PRICE_THRESHOLD', '100'))
SWAP_PRICE_FACTOR: Final[float] = float(os.getenv('SWAP_PRICE_FACTOR', '0.7'))
