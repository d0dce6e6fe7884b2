"""
Server startup pipeline.

Startup runs as a sequence of steps, each returning its result to the next:

    load settings -> connect database -> create app -> launch snapshot -> serve

Any step that cannot complete raises a StartupError and nothing after it
runs. The snapshot refresh is the exception: it is launched detached and its
outcome is only logged.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from flask import Flask

from quotes_api.app import create_app
from quotes_api.config import Settings, load_settings
from quotes_api.database import connect_database
from quotes_api.graphql_api import schema as default_schema
from quotes_api.schema_snapshot import SnapshotRefresh, start_snapshot_refresh

logger = logging.getLogger(__name__)


@dataclass
class Application:
    settings: Settings
    client: Any
    db: Any
    app: Flask
    snapshot: Optional[SnapshotRefresh] = None

    def close(self):
        self.client.close()


def launch_snapshot(settings, schema):
    """Start the snapshot refresh if it is enabled for this deployment."""
    if not settings.snapshot_enabled:
        logger.info("Schema snapshot disabled")
        return None
    return start_snapshot_refresh(schema, settings.snapshot_path)


def bootstrap(settings=None, schema=None, start_snapshot=True) -> Application:
    """Run every startup step up to (not including) serving requests.

    Raises:
        StartupError: when a fatal step fails, e.g. the database is unreachable.
    """
    settings = settings or load_settings()
    schema = schema or default_schema

    client, db = connect_database(settings)
    try:
        app = create_app(settings, db, schema)
    except Exception:
        client.close()
        raise
    snapshot = launch_snapshot(settings, schema) if start_snapshot else None

    return Application(settings=settings, client=client, db=db, app=app, snapshot=snapshot)


def serve(application):
    """Bind the HTTP listener and serve until interrupted."""
    settings = application.settings
    logger.info(f"Running Flask on port {settings.port}")
    try:
        application.app.run(host=settings.host, port=settings.port, debug=settings.debug, use_reloader=False)
    finally:
        application.close()
