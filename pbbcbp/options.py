"""Per-call decoder configuration."""

# Standard imports
import dataclasses
import os
from dataclasses import dataclass
from typing import Self

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Environment variable for each option.
ENV_VARS = {
    'trim_whitespace': "BCBP_TRIM_WHITESPACE",
    'trim_leading_zeros': "BCBP_TRIM_LEADING_ZEROS",
    'empty_string_is_nil': "BCBP_EMPTY_STRING_IS_NIL",
    'trace_enabled': "BCBP_TRACE",
    'drain_bag_tag_padding': "BCBP_DRAIN_BAG_TAG_PADDING",
    'prevalidate': "BCBP_PREVALIDATE",
}

@dataclass(frozen=True)
class DecoderOptions():
    """
    Options controlling how decoded fields are post-processed.

    Options are passed to each decode call and never stored on shared
    state, so concurrent decodes cannot interfere with each other.
    """
    # Strip leading and trailing spaces from every extracted field.
    trim_whitespace: bool = True
    # Strip leading zeros from flight numbers and seat numbers.
    trim_leading_zeros: bool = True
    # Map an empty optional field to None rather than "".
    empty_string_is_nil: bool = True
    # Log every field read at DEBUG level.
    trace_enabled: bool = False
    # Discard unique-block characters after the bag tags instead of
    # failing.
    drain_bag_tag_padding: bool = False
    # Run the validator before decoding.
    prevalidate: bool = False

    def replace(self, **changes) -> Self:
        """Returns a copy with the given options changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls) -> Self:
        """Builds options from BCBP_* environment variables."""
        values = {}
        for option, env_var in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw is None or raw.strip() == "":
                continue
            values[option] = _parse_bool(env_var, raw)
        return cls(**values)


DEFAULT_OPTIONS = DecoderOptions()

def _parse_bool(name: str, raw: str) -> bool:
    """Parses a boolean environment variable."""
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Environment variable {name} has invalid boolean value '{raw}'."
    )
