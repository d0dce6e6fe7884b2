"""
Gunicorn configuration for the Quotes API.

    gunicorn -c quotes_api/gunicorn_config.py quotes_api.wsgi:app
"""

import multiprocessing
import os
from dotenv import load_dotenv

from quotes_api.config import load_settings
from quotes_api.graphql_api import schema
from quotes_api.startup import launch_snapshot

# Load environment variables
load_dotenv()

# Server socket
bind = f"{os.getenv('HOST', '0.0.0.0')}:{os.getenv('PORT', '3000')}"
backlog = 2048

# Worker processes
workers = int(os.getenv('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = 'sync'
timeout = 30
keepalive = 2

# Process naming
proc_name = 'quotes-api'

# Logging
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info')

# Limits
limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190

# Server hooks
def on_starting(server):
    """Log server startup."""
    server.log.info("Starting Gunicorn server...")

def post_fork(server, worker):
    """Setup after worker fork."""
    server.log.info(f"Worker spawned (pid: {worker.pid})")

def when_ready(server):
    """Write the schema snapshot once, from the master, without blocking workers."""
    server.log.info("Server is ready. Spawning workers...")
    return launch_snapshot(load_settings(), schema)
