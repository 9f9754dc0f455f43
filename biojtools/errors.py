"""
Error kinds surfaced by every biojtools operation.

No error is retried internally. Each one carries enough context (path, byte offset, record index or line number)
for a caller to build a message and an exit status.
"""


class HTSError(Exception):
    """
    Base class for all errors raised while reading or writing HTS data.
    """

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path

    def __str__(self):
        message = super().__str__()
        if self.path is not None:
            return "{}: {}".format(self.path, message)
        return message


class IoError(HTSError):
    """
    Exception to indicate a path could not be opened, read, or written, or that its compression could not be decoded.
    """
    pass


class UnsupportedFormat(HTSError):
    """
    Exception to indicate data does not match any known container, or that an operation is not defined for it.
    """
    pass


class DecodeError(HTSError):
    """
    Exception to indicate a malformed record inside an otherwise recognised container.
    Decoding stops at the first malformed record.
    """

    def __init__(self, message, path=None, offset=None, record=None):
        super().__init__(message, path)
        self.offset = offset
        self.record = record

    def __str__(self):
        context = []
        if self.record is not None:
            context.append("record {}".format(self.record))
        if self.offset is not None:
            context.append("byte {}".format(self.offset))
        message = super().__str__()
        return "{} ({})".format(message, ", ".join(context)) if context else message


class ParseError(HTSError):
    """
    Exception to indicate a malformed line in an interval file.
    """

    def __init__(self, message, path=None, line=None):
        super().__init__(message, path)
        self.line = line

    def __str__(self):
        message = super().__str__()
        if self.line is not None:
            return "{} (line {})".format(message, self.line)
        return message


class TruncatedFileWarning(UserWarning):
    """
    Warning to indicate the empty BGZF block marking EOF is missing, the data is possibly truncated.
    """
    pass
