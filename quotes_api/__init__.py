"""
Quotes GraphQL API package.
Flask application serving a GraphQL schema over a MongoDB database, plus the
schema snapshot written at startup for offline client tooling.
"""

__version__ = '1.0.0'
