"""CEP (Brazilian postal code) validation."""

import re

_ZIPCODE = re.compile(r"[0-9]{8}")


def is_valid_zipcode(code) -> bool:
    """True iff *code* is exactly 8 ASCII decimal digits."""
    return isinstance(code, str) and _ZIPCODE.fullmatch(code) is not None
