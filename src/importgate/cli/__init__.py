"""CLI for importgate."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from importgate.cli.commands import dirs as _dirs_module  # noqa: F401
from importgate.cli.main import app, main


__all__ = ["app", "main"]
