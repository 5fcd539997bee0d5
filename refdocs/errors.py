"""Exception types raised by the reference pipeline."""


class ConfigurationError(ValueError):
    """The plugin configuration is unusable."""


class InternalConsistencyError(RuntimeError):
    """The symbol model violates an invariant the pipeline relies on."""
