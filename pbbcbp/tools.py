"""Functions for CLI commands."""

# Standard imports
import os
import sys
from pathlib import Path

# Third-party imports
import colorama
from tabulate import tabulate

# Project imports
import pbbcbp.validator as validator
from pbbcbp.boarding_pass import decode
from pbbcbp.errors import BCBPError, PKPassError
from pbbcbp.models import DecodedPass
from pbbcbp.options import DecoderOptions
from pbbcbp.pkpass import PKPass

colorama.init()

def decode_bcbp(bcbp_str: str, options: DecoderOptions) -> DecodedPass:
    """Decodes a Bar-Coded Boarding Pass string and prints it."""
    try:
        bp = decode(bcbp_str, options)
    except BCBPError as err:
        _print_error(f"The boarding pass data is not valid: {err}")
        sys.exit(1)
    print_pass(bp)
    return bp

def decode_pkpasses(options: DecoderOptions) -> None:
    """Decodes digital boarding passes in the import folder."""
    import_folder = os.getenv("BCBP_IMPORT_PATH")
    if import_folder is None:
        raise KeyError(
            "Environment variable BCBP_IMPORT_PATH is missing."
        )
    import_path = Path(import_folder)
    if not import_path.is_dir():
        raise KeyError(
            "Environment variable BCBP_IMPORT_PATH is not a directory."
        )
    print(f"Decoding digital boarding passes from {import_path}")
    pkpasses = sorted(f for f in import_path.glob("*.pkpass") if f.is_file())
    if len(pkpasses) == 0:
        print("ℹ️ No .pkpass files found.")
        return
    for path in pkpasses:
        print(f"Processing {path}")
        try:
            pkpass = PKPass(path)
        except PKPassError as err:
            _print_warning(f"⚠️ {err} Skipping.")
            continue
        if pkpass.message is None:
            _print_warning(f"⚠️ No barcode message in {path}. Skipping.")
            continue
        try:
            bp = pkpass.decode(options)
        except BCBPError as err:
            _print_warning(
                f"⚠️ The boarding pass data in {path} is not valid: {err}"
            )
            continue
        print_pass(bp)
        archive_filename = pkpass.archive_filename(options, bp)
        print(f"Archive filename: {archive_filename}")

def validate_bcbp(bcbp_str: str) -> None:
    """Validates a Bar-Coded Boarding Pass string and prints any issues."""
    issues = validator.validate(bcbp_str)
    if len(issues) == 0:
        print("✅ No validation issues found.")
        return
    table = [
        [issue.offset, issue.field, issue.value, issue.message]
        for issue in issues
    ]
    _print_warning(f"⚠️ {len(issues)} validation issue(s) found.")
    print(tabulate(table, headers=["Offset", "Field", "Value", "Issue"]))
    sys.exit(1)

def print_pass(bp: DecodedPass) -> None:
    """Prints a decoded boarding pass as tables."""
    header = bp.header
    print(tabulate([
        ["Format", header.format_code],
        ["Version", bp.version],
        ["Passenger", header.passenger_name],
        ["Ticket indicator", header.ticket_indicator],
        ["Legs", header.leg_count],
    ], tablefmt="plain"))
    print()
    table = [
        [
            leg.index + 1,
            leg.pnr,
            leg.operating_carrier,
            leg.flight_number,
            leg.origin,
            leg.destination,
            leg.julian_date,
            leg.compartment,
            leg.seat,
            leg.check_in_sequence,
            leg.passenger_status,
        ]
        for leg in bp.legs
    ]
    print(tabulate(table, headers=[
        "Leg", "PNR", "Carrier", "Flight", "Orig", "Dest", "Day",
        "Class", "Seat", "Seq", "Status",
    ]))
    if bp.unique is not None and len(bp.unique.bag_tags) > 0:
        print()
        print(tabulate(
            [[str(tag)] for tag in bp.unique.bag_tags],
            headers=["Bag tags"],
        ))
    security = bp.security
    if security.is_present:
        print()
        print(tabulate([
            ["Security type", security.security_type],
            ["Declared length", security.declared_length],
            ["Data", security.data],
        ], tablefmt="plain"))

def _print_error(message: str) -> None:
    """Prints an error message in red."""
    print(colorama.Fore.RED + message + colorama.Style.RESET_ALL)

def _print_warning(message: str) -> None:
    """Prints a warning message in yellow."""
    print(colorama.Fore.YELLOW + message + colorama.Style.RESET_ALL)
