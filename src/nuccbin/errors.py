"""
nuccbin/errors.py

Exception hierarchy for the nuccbin codecs.
"""


class NuccError(Exception):
    """Base class for all nuccbin exceptions."""
    pass


class TruncatedError(NuccError):
    """Raised when a fixed-width read runs past the end of the buffer."""

    def __init__(self, offset=0, length=0, limit=0):
        self.offset = offset
        self.length = length
        self.limit = limit
        super().__init__(
            f"Read of {length} bytes at 0x{offset:X} exceeds buffer size 0x{limit:X}"
        )


class MalformedPointerError(NuccError):
    """Raised when a relative pointer resolves outside the buffer or to an unterminated string."""

    def __init__(self, pointer=0, target=0, limit=0, reason="out of bounds"):
        self.pointer = pointer
        self.target = target
        self.limit = limit
        super().__init__(
            f"Pointer 0x{pointer:X} -> 0x{target:X} {reason} (buffer size 0x{limit:X})"
        )


class MalformedTextError(NuccError):
    """Raised when the editable text form fails structural validation."""
    pass


class FieldOverflowError(MalformedTextError):
    """Raised when a value does not fit the fixed-width field it is written to."""
    pass


class UnsupportedVersionError(NuccError):
    """Raised when a version index is outside a versioned format's range."""

    def __init__(self, version=0, available=0):
        self.version = version
        self.available = available
        super().__init__(f"Version index {version} out of bounds (0..{available - 1})")


class MalformedStringError(NuccError):
    """Raised when stored string bytes are not valid UTF-8."""

    def __init__(self, offset=0, data=b""):
        self.offset = offset
        self.data = data
        super().__init__(f"String at 0x{offset:X} is not valid UTF-8: {data!r}")
