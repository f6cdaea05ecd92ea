"""Tools for reading boarding passes from Apple Wallet PKPass files."""

# Standard imports
import json
from datetime import datetime
from pathlib import Path
from zipfile import BadZipFile, ZipFile
from zoneinfo import ZoneInfo

# Third-party imports
from dateutil.parser import isoparse

# Project imports
from pbbcbp.boarding_pass import decode
from pbbcbp.errors import PKPassError
from pbbcbp.models import DecodedPass
from pbbcbp.options import DEFAULT_OPTIONS, DecoderOptions

class PKPass():
    """Represents an Apple Wallet PKPass boarding pass."""
    PASS_FILE = "pass.json"

    def __init__(self, path: Path):
        self.path = Path(path)
        self.pass_json: dict = self._load_pass_json(self.path)
        self.relevant_date: datetime | None = self._parse_relevant_date()
        self.message: str | None = self._parse_message()

    def __repr__(self):
        return f"PKPass({self.path.name})"

    def decode(self,
        options: DecoderOptions = DEFAULT_OPTIONS
    ) -> DecodedPass | None:
        """Decodes the barcode message, if the pass has one."""
        if self.message is None:
            return None
        return decode(self.message, options)

    def archive_filename(self,
        options: DecoderOptions = DEFAULT_OPTIONS,
        boarding_pass: DecodedPass | None = None,
    ) -> str:
        """
        Creates an archive filename.

        An already decoded boarding_pass is used as is; otherwise the
        message is decoded with options.
        """
        fields = []
        if self.relevant_date is None:
            fields.append("NODATE")
        else:
            fields.append(self.relevant_date.strftime("%Y%m%dT%H%MZ"))
        if boarding_pass is None:
            boarding_pass = self.decode(options)
        if boarding_pass is not None:
            leg = boarding_pass.first_leg
            fields.append(leg.operating_carrier)
            fields.append(leg.flight_number)
            fields.append("-".join([leg.origin, leg.destination]))
            if boarding_pass.leg_count > 1:
                fields.append(f"{boarding_pass.leg_count}LEGS")
        fields = [f for f in fields if f]
        return "_".join(fields) + ".pkpass"

    def _load_pass_json(self, path: Path) -> dict:
        """Gets boarding pass JSON."""
        try:
            with ZipFile(path, 'r') as zf:
                if PKPass.PASS_FILE not in zf.namelist():
                    raise PKPassError(
                        f"{PKPass.PASS_FILE} not found in {path}.", path
                    )
                with zf.open(PKPass.PASS_FILE) as pf:
                    return json.loads(pf.read().decode('utf-8'))
        except BadZipFile as err:
            raise PKPassError(f"{path} is not a zip archive.", path) from err

    def _parse_message(self) -> str | None:
        """Gets the barcode message."""
        message = self.pass_json.get('barcode', {}).get('message')
        if message is not None:
            return message
        # Newer passes list barcodes instead of a single barcode.
        for barcode in self.pass_json.get('barcodes', []):
            if barcode.get('message') is not None:
                return barcode['message']
        return None

    def _parse_relevant_date(self) -> datetime | None:
        """Gets the PKPass date."""
        try:
            pass_date = isoparse(self.pass_json.get('relevantDate'))
            return pass_date.astimezone(ZoneInfo("UTC"))
        except (TypeError, ValueError):
            return None
