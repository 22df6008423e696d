class SourceError(RuntimeError):
    pass


class ConfigurationError(SourceError):
    pass


class NotFound(SourceError):
    pass


class TransportError(SourceError):
    pass
