"""routedoc -- Export declared HTTP routes as Postman v2.1 collections.

An application dumps its route table into a manifest (JSON or YAML, as a
file or from a debug endpoint); routedoc turns every route and method into
a ready-to-send Postman request, grouped into folders by route name or
uri, with auth blocks, sample payloads and rendered documentation.

Typical workflow::

    routedoc init --routes routes.yaml --base-url https://api.example.com
    routedoc export -o api.postman_collection.json

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration with precedence resolution.
    exporter: Manifest-to-collection pipeline and atomic output.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich.
"""

__version__ = "0.1.0"
