"""Exception hierarchy for routedoc.

All exceptions inherit from :class:`RoutedocError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`routedoc.exit_codes`.
The top-level error handler in :func:`routedoc.app.main` catches
``RoutedocError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The collection compiler itself raises none of these; they come from the
collaborators around it (manifest loading, factories, auth blocks, the
writer) and propagate through the compiler unchanged.

Subclass hierarchy::

    RoutedocError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- AuthError           (exit 3)
    +-- RouteNotFoundError  (exit 4)
    +-- ConnectionError_    (exit 6)
    +-- ManifestError       (exit 7)
    +-- FactoryError        (exit 8)
    +-- ExportWriteError    (exit 9)
    +-- PluginError         (exit 10)
    +-- ConfigError         (exit 1)
"""

from routedoc.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_FACTORY_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MANIFEST_ERROR,
    EXIT_NOT_FOUND,
    EXIT_PLUGIN_ERROR,
    EXIT_WRITE_ERROR,
)


class RoutedocError(Exception):
    """Base exception for all routedoc errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`routedoc.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RoutedocError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(RoutedocError):
    """Raised when an auth rule has no block builder or a bearer cannot be resolved."""

    exit_code = EXIT_AUTH_FAILURE


class RouteNotFoundError(RoutedocError):
    """Raised when a route looked up by name is not in the manifest."""

    exit_code = EXIT_NOT_FOUND


class ConnectionError_(RoutedocError):
    """Raised on network-level failures while fetching a remote manifest.

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ManifestError(RoutedocError):
    """Raised when the route manifest cannot be parsed or fails validation."""

    exit_code = EXIT_MANIFEST_ERROR


class FactoryError(RoutedocError):
    """Raised when a sample factory module fails to load or a shape is not registered."""

    exit_code = EXIT_FACTORY_ERROR


class ExportWriteError(RoutedocError):
    """Raised when the compiled collection cannot be written to its destination."""

    exit_code = EXIT_WRITE_ERROR


class PluginError(RoutedocError):
    """Raised when a plugin fails to load, initialise, or execute a hook."""

    exit_code = EXIT_PLUGIN_ERROR


class ConfigError(RoutedocError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
