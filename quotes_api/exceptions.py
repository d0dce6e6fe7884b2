"""Errors raised while bringing the server up."""


class StartupError(Exception):
    """A startup step failed and the server must not serve traffic."""


class DatabaseConnectionError(StartupError):
    """The MongoDB connection could not be established."""
