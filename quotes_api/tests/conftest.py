from unittest.mock import MagicMock

from ariadne import QueryType, make_executable_schema
from bson import ObjectId

QUOTE_DOCS = [
    {"_id": ObjectId("5f1d7c3e9b1e8a3f4c2d1a01"), "text": "The unexamined life is not worth living.", "author": "Socrates"},
    {"_id": ObjectId("5f1d7c3e9b1e8a3f4c2d1a02"), "text": "Simplicity is prerequisite for reliability.", "author": "Edsger Dijkstra"},
]


def make_fake_db(docs=None):
    db = MagicMock(name="db")
    db["quotes"].find.return_value = list(QUOTE_DOCS if docs is None else docs)
    return db


def make_minimal_schema():
    """A schema whose only user-defined type is the Query root."""
    query = QueryType()
    query.set_field("ping", lambda *_: "pong")
    return make_executable_schema("type Query { ping: String }", query)
