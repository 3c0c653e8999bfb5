"""reportcard HTTP API layer.

Public API
----------
create_app
    Application factory registering health endpoints plus the student and
    report routes enabled by the supplied dependencies.
"""

from reportcard.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
