"""
Phone Number Normalization

Caller profiles are keyed by E.164 numbers. Inbound caller ids arrive in
whatever shape the telephony provider sends, so every lookup normalizes
first. Ambiguous national numbers are parsed as US numbers by default.
"""

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat
from dataclasses import dataclass
from typing import Optional
from src.config import get_settings
from src.utils.observability import logger


@dataclass
class NormalizedPhone:
    """Result of phone normalization."""
    original: str
    e164: str  # Normalized E.164 format
    country_code: str  # e.g., "1" for US/Canada
    national_number: str  # Number without country code
    is_mobile: bool
    region: str  # e.g., "US"


class PhoneNormalizationError(Exception):
    """Raised when phone number cannot be normalized."""
    pass


class PhoneNormalizer:
    """
    Normalizes phone numbers to E.164 format.

    Usage:
        normalizer = PhoneNormalizer()
        result = normalizer.normalize("(415) 555-2671")
        print(result.e164)  # "+14155552671"
    """

    def __init__(self, default_region: Optional[str] = None):
        self.default_region = default_region or get_settings().default_phone_region

    def normalize(
        self,
        phone: str,
        default_region: Optional[str] = None,
    ) -> NormalizedPhone:
        """
        Normalize a phone number to E.164 format.

        Args:
            phone: Phone number in any format
            default_region: ISO country code for parsing (default: US)

        Returns:
            NormalizedPhone with normalized data

        Raises:
            PhoneNormalizationError: If number is invalid
        """
        original = phone
        region = default_region or self.default_region

        phone = self._clean_input(phone)
        if not phone:
            raise PhoneNormalizationError(f"Empty phone number: '{original}'")

        try:
            parsed = phonenumbers.parse(phone, region)
        except NumberParseException as e:
            raise PhoneNormalizationError(
                f"Cannot parse phone number '{original}': {e}"
            ) from e

        if not phonenumbers.is_valid_number(parsed):
            raise PhoneNormalizationError(f"Invalid phone number: {original}")

        e164 = phonenumbers.format_number(parsed, PhoneNumberFormat.E164)

        number_type = phonenumbers.number_type(parsed)
        is_mobile = number_type in (
            phonenumbers.PhoneNumberType.MOBILE,
            phonenumbers.PhoneNumberType.FIXED_LINE_OR_MOBILE,
        )
        region_code = phonenumbers.region_code_for_number(parsed)

        logger.debug(f"Normalized phone: {original} -> {e164}")

        return NormalizedPhone(
            original=original,
            e164=e164,
            country_code=str(parsed.country_code),
            national_number=str(parsed.national_number),
            is_mobile=is_mobile,
            region=region_code or region,
        )

    def _clean_input(self, phone: str) -> str:
        """Remove common formatting characters."""
        phone = phone.strip()
        # Keep + at start if present
        if phone.startswith("+"):
            return "+" + "".join(c for c in phone[1:] if c.isdigit())
        return "".join(c for c in phone if c.isdigit())

    def are_equivalent(self, phone1: str, phone2: str) -> bool:
        """Check if two phone numbers are equivalent after normalization."""
        try:
            return self.normalize(phone1).e164 == self.normalize(phone2).e164
        except PhoneNormalizationError:
            return False

    def is_valid(self, phone: str, default_region: Optional[str] = None) -> bool:
        try:
            self.normalize(phone, default_region)
            return True
        except PhoneNormalizationError:
            return False


# Singleton instance
_normalizer: Optional[PhoneNormalizer] = None


def get_phone_normalizer() -> PhoneNormalizer:
    """Get or create the phone normalizer singleton."""
    global _normalizer
    if _normalizer is None:
        _normalizer = PhoneNormalizer()
    return _normalizer


def normalize_phone(phone: str, default_region: Optional[str] = None) -> str:
    """
    Convenience function to normalize a phone number.

    Returns:
        E.164 formatted phone number

    Raises:
        PhoneNormalizationError: If number is invalid
    """
    return get_phone_normalizer().normalize(phone, default_region).e164
