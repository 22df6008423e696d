class ConversionError(ValueError):
    pass


class MalformedInput(ConversionError):
    pass


class MalformedTimestamp(ConversionError):
    pass


class NoSynchronizedLyrics(ConversionError):
    pass
