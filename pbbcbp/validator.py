"""Lightweight checks of boarding pass text before decoding."""

# Standard imports
import re
from dataclasses import dataclass

# Project imports
from pbbcbp.errors import ValidationFailed
from pbbcbp.models import FORMAT_CODES, MANDATORY_LENGTH, MAX_LEG_COUNT

_AIRPORT_CODE = re.compile(r"[A-Z]{3}")
_CARRIER_CODE = re.compile(r"[A-Z0-9]{2,3}")
_FLIGHT_NUMBER = re.compile(r"[A-Z0-9]{1,5}")
_PNR_CODE = re.compile(r"[A-Z0-9]{6,7}")
_ISSUE_DATE = re.compile(r"[0-9]{4}")
_SEAT_NUMBER = re.compile(r"[A-Z0-9]+")
_COMPARTMENT_CODE = re.compile(r"[A-Z]")
_PASSENGER_STATUS = re.compile(r"[A-Z0-9]")
_PASSENGER_NAME = re.compile(r"[A-Z/ ]{3,20}")
_TICKET_NUMBER = re.compile(r"[0-9]{10,13}")
_BAG_TAG = re.compile(r"[A-Z0-9]*")

@dataclass(frozen=True)
class ValidationIssue():
    """A problem found in one field of the mandatory block."""
    code: str
    field: str
    value: str | None
    offset: int | None
    message: str

    def __str__(self):
        return self.message


def validate(raw: str | bytes) -> list[ValidationIssue]:
    """
    Checks the mandatory block of BCBP text.

    Returns every issue found; an empty list means the text looks like
    a boarding pass. Nothing is decoded structurally.
    """
    issues = []
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode('ascii')
        except UnicodeDecodeError as err:
            issues.append(ValidationIssue(
                "not_ascii", "input", None, err.start,
                f"Character at offset {err.start} is not ASCII",
            ))
            return issues

    if len(raw) < MANDATORY_LENGTH:
        issues.append(ValidationIssue(
            "too_short", "input", None, None,
            f"Code too short ({len(raw)} characters; minimum "
            f"{MANDATORY_LENGTH} required)",
        ))
        return issues
    if not raw.isascii():
        offset = next(i for i, c in enumerate(raw) if ord(c) > 127)
        issues.append(ValidationIssue(
            "not_ascii", "input", None, offset,
            f"Character at offset {offset} is not ASCII",
        ))

    format_code = raw[0]
    if format_code not in FORMAT_CODES:
        issues.append(_issue(
            "invalid_format", "format_code", format_code, 0,
            "Invalid format code",
        ))

    leg_count = raw[1]
    if not (leg_count.isascii() and leg_count.isdigit()) \
        or not 1 <= int(leg_count) <= MAX_LEG_COUNT:
        issues.append(_issue(
            "invalid_leg_count", "leg_count", leg_count, 1,
            f"Leg count must be between 1 and {MAX_LEG_COUNT}",
        ))

    checks = [
        ("invalid_passenger_name", "passenger_name", 2, 22,
            is_passenger_name, "Invalid passenger name"),
        ("invalid_pnr", "pnr", 23, 30, is_pnr_code, "Invalid PNR code"),
        ("invalid_airport_code", "origin", 30, 33, is_airport_code,
            "Invalid origin airport code"),
        ("invalid_airport_code", "destination", 33, 36, is_airport_code,
            "Invalid destination airport code"),
        ("invalid_carrier", "operating_carrier", 36, 39, is_carrier_code,
            "Invalid operating carrier"),
        ("invalid_flight_number", "flight_number", 39, 44,
            is_flight_number, "Invalid flight number"),
        ("invalid_julian_date", "julian_date", 44, 47, is_julian_date,
            "Invalid Julian date"),
        ("invalid_compartment", "compartment", 47, 48,
            is_compartment_code, "Invalid compartment code"),
        ("invalid_passenger_status", "passenger_status", 57, 58,
            is_passenger_status, "Invalid passenger status"),
    ]
    for code, field, start, stop, check, message in checks:
        value = raw[start:stop]
        if not check(value):
            issues.append(_issue(code, field, value, start, message))
    return issues

def validate_or_raise(raw: str | bytes) -> None:
    """Raises ValidationFailed if validate() reports any issue."""
    issues = validate(raw)
    if issues:
        raise ValidationFailed(issues)

def is_airport_code(code: str) -> bool:
    """Checks for a three-letter IATA airport code."""
    return _AIRPORT_CODE.fullmatch(code) is not None

def is_carrier_code(code: str) -> bool:
    """Checks for a two- or three-character airline designator."""
    return _CARRIER_CODE.fullmatch(code.strip()) is not None

def is_flight_number(number: str) -> bool:
    """Checks for a flight number of up to five characters."""
    return _FLIGHT_NUMBER.fullmatch(number.strip()) is not None

def is_pnr_code(code: str) -> bool:
    """Checks for a six- or seven-character booking reference."""
    return _PNR_CODE.fullmatch(code.strip()) is not None

def is_julian_date(date: str) -> bool:
    """Checks for a day of year between 1 and 366."""
    date = date.strip()
    if not (date.isascii() and date.isdigit()):
        return False
    return 1 <= int(date) <= 366

def is_issue_date(date: str | None) -> bool:
    """
    Checks a boarding pass issue date.

    The date is a year digit followed by a day of year between 1 and
    366. A blank date is allowed since the item is conditional.
    """
    if date is None or date.strip() == "":
        return True
    if _ISSUE_DATE.fullmatch(date) is None:
        return False
    return 1 <= int(date[1:]) <= 366

def is_seat_number(number: str) -> bool:
    """Checks for a non-empty alphanumeric seat number."""
    return _SEAT_NUMBER.fullmatch(number.strip()) is not None

def is_compartment_code(code: str) -> bool:
    """Checks for a single-letter compartment code."""
    return _COMPARTMENT_CODE.fullmatch(code) is not None

def is_passenger_status(status: str) -> bool:
    """Checks for a single alphanumeric passenger status."""
    return _PASSENGER_STATUS.fullmatch(status) is not None

def is_passenger_name(name: str) -> bool:
    """Checks for an upper-case SURNAME/GIVEN name."""
    return _PASSENGER_NAME.fullmatch(name.rstrip()) is not None

def is_ticket_number(number: str) -> bool:
    """Checks for a 10 to 13 digit ticket number."""
    return _TICKET_NUMBER.fullmatch(number) is not None

def is_bag_tag(tag: str | None) -> bool:
    """Checks an optional bag tag; None and blank tags are allowed."""
    if tag is None:
        return True
    return _BAG_TAG.fullmatch(tag) is not None

def _issue(code, field, value, offset, message) -> ValidationIssue:
    """Builds an issue whose message includes the offending value."""
    return ValidationIssue(
        code, field, value, offset, f"{message} '{value}' at offset {offset}"
    )
