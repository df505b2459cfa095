"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~routedoc.exceptions.RoutedocError` subclass.
Build scripts that regenerate a collection can inspect the exit code to
tell a broken manifest from a missing factory without parsing stderr.

Example::

    $ routedoc export --routes routes.yaml
    $ echo $?
    8   # EXIT_FACTORY_ERROR -- a route referenced an unknown input shape
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_AUTH_FAILURE = 3
"""A route auth rule or a bearer credential could not be resolved."""

EXIT_NOT_FOUND = 4
"""A route referenced by name (e.g. ``oauth_route``) does not exist."""

EXIT_CONNECTION_ERROR = 6
"""A remote route manifest could not be fetched."""

EXIT_MANIFEST_ERROR = 7
"""The route manifest could not be parsed or failed validation."""

EXIT_FACTORY_ERROR = 8
"""A sample-value factory failed to load or was not registered."""

EXIT_WRITE_ERROR = 9
"""The compiled collection could not be written."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to load, initialise, or execute."""
