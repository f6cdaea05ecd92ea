"""Decoded boarding pass values."""

# Standard imports
from dataclasses import dataclass

# Length of the mandatory unique and first mandatory repeated blocks.
MANDATORY_LENGTH = 60
# M is the current format; S is deprecated but still accepted.
FORMAT_CODES = ("M", "S")
# IATA Resolution 792 allows at most four legs per pass.
MAX_LEG_COUNT = 4
VERSION_MARKER = ">"
SECURITY_MARKER = "^"
BAG_TAG_LENGTH = 13
MAX_BAG_TAGS = 3

@dataclass(frozen=True)
class Header():
    """
    The 60 mandatory characters at the start of every boarding pass.

    The route and flight fields here are also the first leg's
    mandatory fields.
    """
    format_code: str
    leg_count: int
    passenger_name: str
    ticket_indicator: str
    pnr: str
    origin: str
    destination: str
    operating_carrier: str
    flight_number: str
    julian_date: int
    compartment: str
    seat: str | None
    check_in_sequence: int
    passenger_status: str
    conditional_size: int

    @property
    def surname(self) -> str:
        """Passenger surname (before the slash)."""
        return self.passenger_name.split("/", 1)[0].strip()

    @property
    def given_names(self) -> str | None:
        """Passenger given names and title (after the slash)."""
        if "/" not in self.passenger_name:
            return None
        return self.passenger_name.split("/", 1)[1].strip() or None

    @property
    def name_segments(self) -> list[str]:
        """Lower-case words of the passenger name."""
        return [
            word.lower()
            for part in self.passenger_name.split("/")
            for word in part.split()
        ]

    @property
    def is_electronic_ticket(self) -> bool:
        """Whether the pass is for an electronic ticket."""
        return self.ticket_indicator == "E"


@dataclass(frozen=True)
class BagTag():
    """A 13-digit baggage tag license plate number."""
    license_plate: str

    def __str__(self):
        return self.license_plate

    @property
    def type_digit(self) -> str:
        """Leading digit (0 interline, 1 fall-back, 2 rush)."""
        return self.license_plate[0:1]

    @property
    def airline_numeric_code(self) -> str:
        """Three-digit numeric code of the issuing carrier."""
        return self.license_plate[1:4]

    @property
    def serial_number(self) -> str:
        """Six-digit initial tag number."""
        return self.license_plate[4:10]

    @property
    def consecutive_count(self) -> int | None:
        """Number of consecutive tags following the initial one."""
        raw = self.license_plate[10:13]
        if not raw.isdigit():
            return None
        return int(raw)


@dataclass(frozen=True)
class UniqueConditionalInfo():
    """Conditional items that appear once per pass."""
    version_marker: str
    version: int
    unique_size: int
    passenger_description: str | None = None
    check_in_source: str | None = None
    pass_source: str | None = None
    issue_date: str | None = None
    document_type: str | None = None
    issuing_airline: str | None = None
    bag_tags: tuple[BagTag, ...] = ()

    @property
    def issue_year_digit(self) -> int | None:
        """Last digit of the year the pass was issued."""
        date = self.issue_date
        if date is None or len(date) != 4 or not date[0].isdigit():
            return None
        return int(date[0])

    @property
    def issue_day(self) -> int | None:
        """Day of year the pass was issued."""
        date = self.issue_date
        if date is None:
            return None
        if len(date) == 4:
            date = date[1:]
        if len(date) != 3 or not date.isdigit():
            return None
        return int(date)


@dataclass(frozen=True)
class LegConditionalData():
    """Conditional and airline-use items for one leg."""
    conditional_size: int
    airline_numeric_code: str | None = None
    ticket_number: str | None = None
    selectee: str | None = None
    international_doc_verification: str | None = None
    marketing_carrier: str | None = None
    frequent_flyer_airline: str | None = None
    frequent_flyer_number: str | None = None
    id_ad_indicator: str | None = None
    free_baggage_allowance: str | None = None
    fast_track: str | None = None
    airline_use: str | None = None

    @property
    def selectee_flag(self) -> bool | None:
        """Selectee indicator as a boolean."""
        return _flag(self.selectee)

    @property
    def fast_track_flag(self) -> bool | None:
        """Fast track indicator as a boolean."""
        return _flag(self.fast_track)


@dataclass(frozen=True)
class Leg():
    """One flight leg. Leg 0 shares its mandatory fields with the header."""
    index: int
    pnr: str
    origin: str
    destination: str
    operating_carrier: str
    flight_number: str
    julian_date: int
    compartment: str
    seat: str | None
    check_in_sequence: int
    passenger_status: str
    conditional_size: int
    conditional: LegConditionalData | None = None

    def __str__(self):
        return (
            f"{self.operating_carrier} {self.flight_number} "
            f"{self.origin} → {self.destination} (day {self.julian_date})"
        )


@dataclass(frozen=True)
class SecurityBlock():
    """
    Trailing security data.

    When the trailer does not start with the security marker, the whole
    trailer is kept in data and the other fields are None.
    """
    marker: str | None = None
    security_type: str | None = None
    declared_length: int | None = None
    data: str | None = None

    @property
    def is_marked(self) -> bool:
        """Whether the trailer started with the security marker."""
        return self.marker is not None

    @property
    def is_present(self) -> bool:
        """Whether any trailing data was found."""
        return self.is_marked or self.data is not None


@dataclass(frozen=True)
class DecodedPass():
    """A fully decoded boarding pass."""
    header: Header
    unique: UniqueConditionalInfo | None
    legs: tuple[Leg, ...]
    security: SecurityBlock
    raw: str

    def __str__(self):
        return self.raw.replace(" ", "·")

    @property
    def version(self) -> int | None:
        """BCBP version number, if the pass has conditional data."""
        if self.unique is None:
            return None
        return self.unique.version

    @property
    def leg_count(self) -> int:
        """Number of decoded legs."""
        return len(self.legs)

    @property
    def first_leg(self) -> Leg:
        """The leg described by the header."""
        return self.legs[0]


def _flag(value: str | None) -> bool | None:
    """Converts a Y/N style indicator to a boolean."""
    if value in ("Y", "1"):
        return True
    if value in ("N", "0"):
        return False
    return None
