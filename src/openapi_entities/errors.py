"""Error taxonomy for openapi-entities.

Every failure aborts the whole run; nothing is retried and no partial
output is written.
"""


class OpenApiEntitiesError(Exception):
    """Base class for all errors raised by openapi-entities."""


class LoadError(OpenApiEntitiesError):
    """The document cannot be read, parsed, or has unresolvable references."""


class ResolutionError(OpenApiEntitiesError):
    """A schema node cannot be resolved to a type (e.g. a malformed $ref)."""


class BuildError(OpenApiEntitiesError):
    """A schema or operation cannot be turned into an entity."""


class ConfigError(OpenApiEntitiesError):
    """The run configuration is unusable."""


class EmitError(OpenApiEntitiesError):
    """The output envelope cannot be written."""
