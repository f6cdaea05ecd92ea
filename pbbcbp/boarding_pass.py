"""Tools for decoding Bar-Coded Boarding Passes (BCBP)."""

# Standard imports
import logging

# Project imports
import pbbcbp.validator as validator
from pbbcbp.cursor import FieldCursor
from pbbcbp.errors import (
    BagTagPaddingInvalid,
    BCBPError,
    InputTooShort,
    InvalidFormat,
    InvalidLegCount,
    NotABoardingPass,
    SegmentSubConditionalInvalid,
    TrailingDataNotConsumed,
    UnexpectedVersionMarker,
)
from pbbcbp.models import (
    BAG_TAG_LENGTH,
    FORMAT_CODES,
    MANDATORY_LENGTH,
    MAX_BAG_TAGS,
    MAX_LEG_COUNT,
    SECURITY_MARKER,
    VERSION_MARKER,
    BagTag,
    DecodedPass,
    Header,
    Leg,
    LegConditionalData,
    SecurityBlock,
    UniqueConditionalInfo,
)
from pbbcbp.options import DEFAULT_OPTIONS, DecoderOptions
from pbbcbp.scope import ScopeStack

logger = logging.getLogger(__name__)

# Field layout of each block, in read order. 'kind' is text, int or hex.
# 'optional' fields map to None when empty, 'zeros' fields may have
# leading zeros stripped, and 'if_remaining' fields are only read while
# the enclosing scope still has characters left.
_BCBP_FIELDS = {
    "mandatory_unique": [
        # 1. Format Code
        {'key': 'format_code', 'length': 1},
        # 5. Number of Legs Encoded
        {'key': 'leg_count', 'length': 1, 'kind': 'int'},
        # 11. Passenger Name
        {'key': 'passenger_name', 'length': 20},
        # 253. Electronic Ticket Indicator
        {'key': 'ticket_indicator', 'length': 1},
    ],
    "mandatory_repeated": [
        # 7. Operating carrier PNR Code
        {'key': 'pnr', 'length': 7},
        # 26. From City Airport Code
        {'key': 'origin', 'length': 3},
        # 38. To City Airport Code
        {'key': 'destination', 'length': 3},
        # 42. Operating Carrier Designator
        {'key': 'operating_carrier', 'length': 3},
        # 43. Flight Number
        {'key': 'flight_number', 'length': 5, 'zeros': True},
        # 46. Date of Flight (Julian Date)
        {'key': 'julian_date', 'length': 3, 'kind': 'int'},
        # 71. Compartment Code
        {'key': 'compartment', 'length': 1},
        # 104. Seat Number
        {'key': 'seat', 'length': 4, 'optional': True, 'zeros': True},
        # 107. Check-in Sequence Number
        {'key': 'check_in_sequence', 'length': 5, 'kind': 'int'},
        # 113. Passenger Status
        {'key': 'passenger_status', 'length': 1},
        # 6. Field size of variable size field (Conditional + Airline
        # item 4) in hexadecimal
        {'key': 'conditional_size', 'length': 2, 'kind': 'hex'},
    ],
    "conditional_unique": [
        # 15. Passenger Description
        {'key': 'passenger_description', 'length': 1, 'optional': True},
        # 12. Source of Check-in
        {'key': 'check_in_source', 'length': 1, 'optional': True},
        # 14. Source of Boarding Pass Issuance
        {'key': 'pass_source', 'length': 1, 'optional': True},
        # 22. Date of Issue of Boarding Pass (Julian Date)
        {'key': 'issue_date', 'length': 4, 'optional': True},
        # 16. Document type
        {'key': 'document_type', 'length': 1, 'optional': True},
        # 21. Airline Designator of Boarding Pass Issuer
        {'key': 'issuing_airline', 'length': 3, 'optional': True},
    ],
    "conditional_repeated": [
        # 142. Airline Numeric Code
        {'key': 'airline_numeric_code', 'length': 3, 'optional': True},
        # 143. Document Form/Serial Number
        {'key': 'ticket_number', 'length': 10, 'optional': True},
        # 18. Selectee Indicator
        {'key': 'selectee', 'length': 1, 'optional': True},
        # 108. International Documentation Verification
        {'key': 'international_doc_verification', 'length': 1,
            'optional': True},
        # 19. Marketing Carrier Designator
        {'key': 'marketing_carrier', 'length': 3, 'optional': True},
        # 20. Frequent Flier Airline Designator
        {'key': 'frequent_flyer_airline', 'length': 3, 'optional': True},
        # 236. Frequent Flier Number
        {'key': 'frequent_flyer_number', 'length': 16, 'optional': True},
        # 89. ID/AD Indicator
        {'key': 'id_ad_indicator', 'length': 1, 'optional': True,
            'if_remaining': True},
        # 118. Free Baggage Allowance
        {'key': 'free_baggage_allowance', 'length': 3, 'optional': True,
            'if_remaining': True},
        # 254. Fast Track
        {'key': 'fast_track', 'length': 1, 'optional': True,
            'if_remaining': True},
    ],
}

def decode(bcbp: str | bytes,
    options: DecoderOptions = DEFAULT_OPTIONS
) -> DecodedPass:
    """
    Decodes BCBP text into a DecodedPass.

    Decoding runs header, unique conditional items, each leg and then
    the security trailer, strictly in that order. Every declared size
    opens a scope that must be consumed exactly; any disagreement
    raises a BCBPError rather than returning a partial pass.
    """
    if options.prevalidate:
        validator.validate_or_raise(bcbp)
    cursor = FieldCursor(bcbp)
    scopes = ScopeStack(cursor, trace=options.trace_enabled)

    header, leg_fields = _decode_header(scopes, options)
    scopes.open(header.conditional_size, "conditional block")
    unique = None
    if scopes.remaining > 0:
        unique = _decode_unique_conditional(scopes, options)

    legs = [_decode_leg(scopes, 0, leg_fields, options)]
    for index in range(1, header.leg_count):
        leg_fields = _read_block(scopes, "mandatory_repeated", options)
        scopes.open(leg_fields['conditional_size'], f"leg {index} block")
        legs.append(_decode_leg(scopes, index, leg_fields, options))

    security = _decode_security(scopes, options)
    if options.trace_enabled:
        logger.debug(
            "Decoded %d leg(s); security present: %s",
            len(legs), security.is_present,
        )
    return DecodedPass(
        header=header,
        unique=unique,
        legs=tuple(legs),
        security=security,
        raw=cursor.text,
    )

def _decode_header(scopes: ScopeStack,
    options: DecoderOptions
) -> tuple[Header, dict]:
    """
    Decodes the 60 mandatory characters.

    Returns the header and the mandatory fields of the first leg. Any
    failure means the input is not a boarding pass at all, so it is
    wrapped in NotABoardingPass.
    """
    cursor = scopes.cursor
    try:
        if len(cursor) < MANDATORY_LENGTH:
            raise InputTooShort(len(cursor), MANDATORY_LENGTH)
        unique = _read_block(scopes, "mandatory_unique", options)
        if unique['format_code'] not in FORMAT_CODES:
            raise InvalidFormat(unique['format_code'])
        if unique['leg_count'] < 1 or unique['leg_count'] > MAX_LEG_COUNT:
            raise InvalidLegCount(unique['leg_count'], MAX_LEG_COUNT)
        repeated = _read_block(scopes, "mandatory_repeated", options)
    except BCBPError as err:
        raise NotABoardingPass(err) from err
    return Header(**unique, **repeated), repeated

def _decode_unique_conditional(scopes: ScopeStack,
    options: DecoderOptions
) -> UniqueConditionalInfo:
    """Decodes the conditional items that appear once per pass."""
    # 8. Beginning of Version Number
    marker_offset = scopes.cursor.offset
    marker = scopes.read(1, "version_marker")
    if marker != VERSION_MARKER:
        raise UnexpectedVersionMarker(marker, VERSION_MARKER, marker_offset)
    # 9. Version Number
    version = scopes.read_int(1, "version")
    # 10. Field Size of Following Structured Message - Unique
    unique_size = scopes.read_hex(2, "conditional_unique_size")

    scopes.open(unique_size, "unique conditional items")
    values = _read_block(scopes, "conditional_unique", options)

    # 23. Baggage Tag License Plate Number, then 31. 1st and 2nd
    # Non-Consecutive Baggage Tag License Plate Numbers
    bag_tags = []
    slot = 0
    while slot < MAX_BAG_TAGS and scopes.remaining >= BAG_TAG_LENGTH:
        slot += 1
        raw = scopes.read(BAG_TAG_LENGTH, f"bag_tag_{slot}")
        tag = _clean(raw, options, optional=True)
        if tag:
            bag_tags.append(BagTag(tag))

    if scopes.remaining > 0:
        if not options.drain_bag_tag_padding:
            scope = scopes.current
            raise BagTagPaddingInvalid(
                scope.remaining, scope.name, scopes.cursor.offset
            )
        padding = scopes.drain("bag_tag_padding")
        logger.warning(
            "Discarded %d characters after bag tags: %r",
            len(padding), padding,
        )
    scopes.close()

    return UniqueConditionalInfo(
        version_marker=marker,
        version=version,
        unique_size=unique_size,
        bag_tags=tuple(bag_tags),
        **values,
    )

def _decode_leg(scopes: ScopeStack, index: int, fields: dict,
    options: DecoderOptions
) -> Leg:
    """
    Decodes what is left of a leg's variable size block and closes it.

    The leg's block scope must already be open. For the first leg this
    is the header's conditional block, after the unique items.
    """
    conditional = None
    if scopes.remaining > 0:
        conditional = _decode_leg_conditional(scopes, index, options)
    scopes.close()
    return Leg(index=index, conditional=conditional, **fields)

def _decode_leg_conditional(scopes: ScopeStack, index: int,
    options: DecoderOptions
) -> LegConditionalData:
    """Decodes a leg's conditional items and airline use data."""
    # 17. Field Size of Following Structured Message - Repeated
    size = scopes.read_hex(2, "conditional_repeated_size")
    scopes.open(size, f"leg {index} conditional items")
    values = _read_block(scopes, "conditional_repeated", options)
    scopes.close(
        on_leftover=lambda actual, name, offset: (
            SegmentSubConditionalInvalid(index, actual, name, offset)
        )
    )

    # 4. For Individual Airline Use
    airline_use = None
    if scopes.remaining > 0:
        airline_use = _clean(
            scopes.drain("airline_use"), options, optional=True
        )
    return LegConditionalData(
        conditional_size=size, airline_use=airline_use, **values
    )

def _decode_security(scopes: ScopeStack,
    options: DecoderOptions
) -> SecurityBlock:
    """
    Decodes the trailer after the last leg.

    Without the security marker the whole trailer is kept as opaque
    data. Security data is never trimmed.
    """
    cursor = scopes.cursor
    if cursor.at_end:
        return SecurityBlock()
    if cursor.peek() != SECURITY_MARKER:
        trailer = scopes.read(cursor.remaining, "trailing_data")
        return SecurityBlock(
            data=_clean(trailer, options, optional=True, trim=False)
        )

    # 25. Beginning of Security Data
    marker = scopes.read(1, "security_marker")
    # 28. Type of Security Data
    security_type = _clean(
        scopes.read(1, "security_type"), options, optional=True
    )
    # 29. Length of Security Data
    length = scopes.read_hex(2, "security_length")
    # 30. Security Data
    scopes.open(length, "security data")
    data = scopes.drain("security_data")
    scopes.close()
    if not cursor.at_end:
        raise TrailingDataNotConsumed(cursor.remaining, cursor.offset)
    return SecurityBlock(
        marker=marker,
        security_type=security_type,
        declared_length=length,
        data=_clean(data, options, optional=True, trim=False),
    )

def _read_block(scopes: ScopeStack, block: str,
    options: DecoderOptions
) -> dict:
    """Reads every field of a block and returns a dict of values."""
    values = {}
    for field in _BCBP_FIELDS[block]:
        key = field['key']
        if field.get('if_remaining') and scopes.remaining == 0:
            values[key] = None
            continue
        kind = field.get('kind', 'text')
        if kind == 'int':
            values[key] = scopes.read_int(field['length'], key)
        elif kind == 'hex':
            values[key] = scopes.read_hex(field['length'], key)
        else:
            values[key] = _clean(
                scopes.read(field['length'], key),
                options,
                optional=field.get('optional', False),
                strip_zeros=field.get('zeros', False),
            )
    return values

def _clean(text: str, options: DecoderOptions, optional: bool = False,
    strip_zeros: bool = False, trim: bool = True
) -> str | None:
    """Applies the trimming and empty value policies to a field."""
    if trim and options.trim_whitespace:
        text = text.strip()
    if strip_zeros and options.trim_leading_zeros and text:
        text = text.lstrip("0") or "0"
    if optional and options.empty_string_is_nil and text == "":
        return None
    return text
