"""Format validators for claim codes and timely filing date arithmetic.

All validators are total: malformed or non-string input returns False.
"""

import re
from datetime import date, datetime, timedelta

NPI_PREFIX = "80840"

_NPI_PATTERN = re.compile(r"^\d{10}$", re.ASCII)
# Letter (U reserved), two digits, then up to four more characters; the
# period before them is optional.
_ICD10_PATTERN = re.compile(r"^[A-TV-Z]\d{2}(\.?[A-Z0-9]{1,4})?$", re.IGNORECASE | re.ASCII)
_CPT_PATTERN = re.compile(r"^\d{5}$", re.ASCII)
_HCPCS_PATTERN = re.compile(r"^[A-Z]\d{4}$", re.IGNORECASE | re.ASCII)
_MODIFIER_PATTERN = re.compile(r"^[A-Z0-9]{2}$", re.IGNORECASE | re.ASCII)
_POS_PATTERN = re.compile(r"^\d{2}$", re.ASCII)


def _matches(pattern: re.Pattern[str], value: object) -> bool:
    # fullmatch so a trailing newline never slips past "$"
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def luhn_checksum_valid(digits: str) -> bool:
    """Luhn mod-10 check over a string of ASCII digits."""
    total = 0
    for i, char in enumerate(reversed(digits)):
        n = int(char)
        if i % 2 == 1:
            n *= 2
            if n > 9:
                n -= 9
        total += n
    return total % 10 == 0


def is_valid_npi(npi: object) -> bool:
    """True iff ``npi`` is 10 digits passing Luhn with the 80840 card issuer prefix."""
    if not _matches(_NPI_PATTERN, npi):
        return False
    return luhn_checksum_valid(NPI_PREFIX + npi)


def is_valid_icd10(code: object) -> bool:
    return _matches(_ICD10_PATTERN, code)


def is_valid_cpt(code: object) -> bool:
    return _matches(_CPT_PATTERN, code)


def is_valid_hcpcs(code: object) -> bool:
    return _matches(_HCPCS_PATTERN, code)


def is_valid_modifier(code: object) -> bool:
    return _matches(_MODIFIER_PATTERN, code)


def is_valid_place_of_service(code: object) -> bool:
    return _matches(_POS_PATTERN, code)


def elapsed_days(date_of_service: date, reference_date: date) -> int:
    """Whole days from date of service to reference date, floored.

    Two datetimes are compared to the second; otherwise both sides are
    reduced to calendar dates.
    """
    if isinstance(date_of_service, datetime) and isinstance(reference_date, datetime):
        return (reference_date - date_of_service) // timedelta(days=1)
    if isinstance(date_of_service, datetime):
        date_of_service = date_of_service.date()
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()
    return (reference_date - date_of_service).days


def is_within_timely_filing(
    date_of_service: date,
    timely_filing_days: int,
    reference_date: date | None = None,
) -> bool:
    """True iff no more than ``timely_filing_days`` have elapsed since service."""
    reference_date = reference_date or date.today()
    return elapsed_days(date_of_service, reference_date) <= timely_filing_days


def days_until_timely_filing_expires(
    date_of_service: date,
    timely_filing_days: int,
    reference_date: date | None = None,
) -> int:
    reference_date = reference_date or date.today()
    return max(0, timely_filing_days - elapsed_days(date_of_service, reference_date))
