"""
Runtime configuration for the Quotes API.
Values come from the environment, with a local .env file loaded first.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_MONGO_URL = 'mongodb://localhost:27017/test'
DEFAULT_SNAPSHOT_PATH = 'cache/schema.json'
DEFAULT_PORT = 3000


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class Settings:
    mongo_url: str = DEFAULT_MONGO_URL
    mongo_database: str = 'test'
    mongo_timeout_ms: int = 5000
    host: str = '0.0.0.0'
    port: int = DEFAULT_PORT
    debug: bool = False
    graphiql: bool = True
    allowed_origins: List[str] = field(default_factory=lambda: ['*'])
    static_folder: Optional[Path] = None
    snapshot_enabled: bool = True
    snapshot_path: Path = field(default_factory=lambda: Path(DEFAULT_SNAPSHOT_PATH).resolve())


def load_settings(base_dir=None) -> Settings:
    """Build Settings from environment variables.

    Relative paths (static folder, snapshot file) are resolved against
    ``base_dir``, which defaults to the current working directory.
    """
    load_dotenv()
    base = Path(base_dir) if base_dir else Path.cwd()

    static_folder = os.getenv('STATIC_FOLDER', 'public').strip()
    snapshot_path = Path(os.getenv('SNAPSHOT_PATH', DEFAULT_SNAPSHOT_PATH))

    return Settings(
        mongo_url=os.getenv('MONGO_URL', DEFAULT_MONGO_URL),
        mongo_database=os.getenv('MONGO_DATABASE', 'test'),
        mongo_timeout_ms=int(os.getenv('MONGO_TIMEOUT_MS', 5000)),
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', DEFAULT_PORT)),
        debug=_env_flag('DEBUG', False),
        graphiql=_env_flag('GRAPHIQL', True),
        allowed_origins=[o.strip() for o in os.getenv('ALLOWED_ORIGINS', '*').split(',') if o.strip()],
        static_folder=(base / static_folder).resolve() if static_folder else None,
        snapshot_enabled=_env_flag('SNAPSHOT_ENABLED', True),
        snapshot_path=snapshot_path if snapshot_path.is_absolute() else (base / snapshot_path).resolve(),
    )
