"""Errors raised while decoding boarding pass data."""


class BCBPError(Exception):
    """
    Base class for all boarding pass decoding errors.

    Every error records the byte offset and field name (when known) so
    that a wrong declared size can be traced back to where it was read.
    """
    def __init__(self, message: str, offset: int | None = None,
        field: str | None = None
    ):
        self.offset = offset
        self.field = field
        location = []
        if field is not None:
            location.append(f"field '{field}'")
        if offset is not None:
            location.append(f"offset {offset}")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class NotABoardingPass(BCBPError):
    """The mandatory header could not be decoded."""
    def __init__(self, cause: BCBPError):
        self.cause = cause
        super().__init__(
            f"Input is not BCBP data: {cause}",
            offset=cause.offset,
            field=None,
        )


class InputTooShort(BCBPError):
    """Input is shorter than the mandatory block."""
    def __init__(self, length: int, minimum: int):
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Input is {length} characters long; at least {minimum} are "
            "required"
        )


class InvalidFormat(BCBPError):
    """Format code is not one of the known codes."""
    def __init__(self, format_code: str, offset: int = 0):
        self.format_code = format_code
        super().__init__(
            f"Invalid format code '{format_code}'",
            offset=offset,
            field="format_code",
        )


class InvalidLegCount(BCBPError):
    """Number of legs encoded is out of bounds."""
    def __init__(self, leg_count: int, maximum: int, offset: int = 1):
        self.leg_count = leg_count
        self.maximum = maximum
        super().__init__(
            f"Leg count {leg_count} is not between 1 and {maximum}",
            offset=offset,
            field="leg_count",
        )


class TruncatedInput(BCBPError):
    """A read ran past the end of the input."""
    def __init__(self, requested: int, available: int, offset: int,
        field: str | None = None
    ):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Needed {requested} characters but only {available} remain",
            offset=offset,
            field=field,
        )


class EncodingError(BCBPError):
    """A field could not be decoded as the expected kind of text."""


class InvalidEncoding(EncodingError):
    """Input is not 7-bit ASCII text."""


class MalformedHex(EncodingError):
    """A size field is not valid hexadecimal."""
    def __init__(self, text: str, offset: int, field: str | None = None):
        self.text = text
        super().__init__(
            f"'{text}' is not a hexadecimal value",
            offset=offset,
            field=field,
        )


class MalformedInteger(EncodingError):
    """A numeric field is not a valid decimal integer."""
    def __init__(self, text: str, offset: int, field: str | None = None):
        self.text = text
        super().__init__(
            f"'{text}' is not a decimal integer",
            offset=offset,
            field=field,
        )


class ScopeError(BCBPError):
    """Declared sizes of nested regions disagree with the data."""


class ScopeOverrun(ScopeError):
    """A read is larger than what an open scope has left."""
    def __init__(self, requested: int, remaining: int, scope: str,
        offset: int, field: str | None = None
    ):
        self.requested = requested
        self.remaining = remaining
        self.scope = scope
        super().__init__(
            f"Reading {requested} characters overruns {scope}, which has "
            f"{remaining} remaining",
            offset=offset,
            field=field,
        )


class ScopeNotExhausted(ScopeError):
    """A scope was closed with characters left over."""
    expected = 0

    def __init__(self, actual: int, scope: str, offset: int,
        message: str | None = None
    ):
        self.actual = actual
        self.scope = scope
        if message is None:
            message = (
                f"{scope} closed with {actual} characters remaining "
                f"(expected {self.expected})"
            )
        super().__init__(message, offset=offset)


class BagTagPaddingInvalid(ScopeNotExhausted):
    """Characters left in the unique block do not form a bag tag."""
    def __init__(self, actual: int, scope: str, offset: int):
        super().__init__(actual, scope, offset, message=(
            f"{actual} characters after the bag tags in {scope} do not "
            "form a 13-character bag tag"
        ))


class SegmentSubConditionalInvalid(ScopeNotExhausted):
    """A leg's conditional block did not close exactly."""
    def __init__(self, leg_index: int, actual: int, scope: str,
        offset: int
    ):
        self.leg_index = leg_index
        super().__init__(actual, scope, offset, message=(
            f"Leg {leg_index} conditional block closed with {actual} "
            "characters remaining"
        ))


class TrailingDataNotConsumed(ScopeError):
    """Characters remain after the security block."""
    def __init__(self, remaining: int, offset: int):
        self.remaining = remaining
        super().__init__(
            f"{remaining} characters remain after the security data",
            offset=offset,
        )


class UnexpectedVersionMarker(BCBPError):
    """The conditional block does not start with the version marker."""
    def __init__(self, marker: str, expected: str, offset: int):
        self.marker = marker
        super().__init__(
            f"Expected version marker '{expected}' but found '{marker}'",
            offset=offset,
            field="version_marker",
        )


class ValidationFailed(BCBPError):
    """Pre-validation reported one or more issues."""
    def __init__(self, issues: list):
        self.issues = list(issues)
        summary = "; ".join(issue.message for issue in self.issues)
        super().__init__(f"Boarding pass failed validation: {summary}")


class PKPassError(Exception):
    """A .pkpass file could not be read as a boarding pass archive."""
    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)
