class CodecError(ValueError):
    """Base class for every failure raised by the text codec."""


class FilenameTooLong(CodecError):
    pass


class UnsupportedSymbol(CodecError):
    pass


class UnknownSymbol(CodecError):
    pass


class CorruptContainer(CodecError):
    pass


class CorruptTree(CorruptContainer):
    pass


class TruncatedStream(CorruptContainer):
    pass


class IntegrityMismatch(CodecError):
    """Raised only on request, when a caller rejects an unverified decode."""
