"""
WSGI entry point for gunicorn.

Each worker connects to MongoDB on import; the schema snapshot is launched
once by the master process (see gunicorn_config.when_ready).
"""

from quotes_api.startup import bootstrap

application = bootstrap(start_snapshot=False)
app = application.app
