"""
Schema snapshot cache.

Runs the standard introspection query against the executable schema and
writes the result, pretty-printed, to a JSON file that client tooling (Relay
compiler, type generators) can read without a live server.

The refresh runs once per process at startup on a detached thread. It never
gates readiness: failures are logged and recorded on the refresh handle, and
the previous snapshot file is left as it was.
"""

import json
import logging
import os
import tempfile
import threading
from enum import Enum
from pathlib import Path

from graphql import get_introspection_query, graphql_sync

logger = logging.getLogger(__name__)

INTROSPECTION_QUERY = get_introspection_query()


class SnapshotState(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SnapshotError(Exception):
    """Introspection returned errors instead of a document."""


def build_introspection_document(schema):
    """Execute the introspection query and return the result as a dict.

    The document has the GraphQL response shape, ``{"data": {"__schema": ...}}``.

    Raises:
        SnapshotError: if the executor reports any error.
    """
    result = graphql_sync(schema, INTROSPECTION_QUERY, context_value={})
    if result.errors:
        messages = "; ".join(error.message for error in result.errors)
        raise SnapshotError(f"Introspection query failed: {messages}")
    return {"data": result.data}


class SnapshotRefresh:
    """A single refresh of the snapshot file.

    Moves from PENDING to SUCCEEDED or FAILED exactly once. ``error`` holds
    the exception of a failed refresh.
    """

    def __init__(self, schema, output_path):
        self.schema = schema
        self.output_path = Path(output_path)
        self.state = SnapshotState.PENDING
        self.error = None
        self._thread = None
        self._lock = threading.Lock()

    def run(self):
        """Refresh the snapshot in the calling thread and return the final state."""
        with self._lock:
            if self.state is not SnapshotState.PENDING:
                raise RuntimeError("Snapshot refresh has already run")
            try:
                payload = json.dumps(build_introspection_document(self.schema), indent=2)
                self._write(payload)
            except Exception as e:
                self.error = e
                self.state = SnapshotState.FAILED
                logger.error(f"Could not write schema snapshot to {self.output_path}: {e}")
            else:
                self.state = SnapshotState.SUCCEEDED
                logger.info(f"Schema snapshot written to {self.output_path}")
        return self.state

    def _write(self, payload):
        """Write ``payload`` to a sibling temp file, then move it over the snapshot.

        The previous snapshot is replaced only once the new one is complete;
        on any error the temp file is removed and the old file stays as it was.
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.output_path.parent,
            prefix=f".{self.output_path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with tmp:
                tmp.write(payload)
            os.chmod(tmp.name, 0o644)
            os.replace(tmp.name, self.output_path)
        except Exception:
            try:
                os.unlink(tmp.name)
            except FileNotFoundError:
                pass
            raise

    def start(self):
        """Run the refresh on a daemon thread and return immediately."""
        self._thread = threading.Thread(target=self.run, name="schema-snapshot", daemon=True)
        self._thread.start()
        return self

    def join(self, timeout=None):
        """Wait for a started refresh; returns the state observed afterwards."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.state

    @property
    def done(self):
        return self.state is not SnapshotState.PENDING


def refresh_snapshot(schema, output_path):
    """Write the introspection snapshot synchronously.

    Returns True on success, False on a logged failure. Never raises for
    executor or file-system errors.
    """
    return SnapshotRefresh(schema, output_path).run() is SnapshotState.SUCCEEDED


def start_snapshot_refresh(schema, output_path):
    """Launch a background snapshot refresh and return its handle."""
    logger.debug(f"Starting schema snapshot refresh for {output_path}")
    return SnapshotRefresh(schema, output_path).start()
