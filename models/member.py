import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

import config
from core.errors import ValidationError
from core.utils import is_numeric_id, parse_date

# Characters that would break a stored record line
RECORD_DELIMITER = "|"
SUBFIELD_DELIMITER = ","


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"

    @classmethod
    def parse(cls, value) -> "Gender":
        """Accepts a Gender or its name in any casing."""
        if isinstance(value, cls):
            return value
        clean = str(value or "").strip().lower()
        for g in cls:
            if g.value.lower() == clean:
                return g
        raise ValidationError("Please select a gender!")


class MemberType(str, Enum):
    # Values double as the type tag in the data file
    REGULAR = "REGULAR"
    PREMIUM = "PREMIUM"


@dataclass
class RegularPayload:
    """Plan and upgrade state carried by a regular member."""
    plan: str = config.DEFAULT_PLAN
    price: float = config.PLAN_PRICES[config.DEFAULT_PLAN]
    attendance_limit: int = config.ATTENDANCE_LIMIT
    eligible_for_upgrade: bool = False


@dataclass
class PremiumPayload:
    """
    Trainer and payment state carried by a premium member.

    paid_amount here is the cumulative payment tracker built up by
    finance_service.pay_due_amount. It is separate from Member.paid_amount,
    which is the amount recorded when the member was created.
    """
    personal_trainer: str = ""
    premium_charge: float = config.PREMIUM_CHARGE
    paid_amount: float = 0.0
    is_full_payment: bool = False
    discount_amount: float = 0.0

    @property
    def remaining_amount(self) -> float:
        return self.premium_charge - self.paid_amount


Payload = Union[RegularPayload, PremiumPayload]


@dataclass
class Member:
    """
    Represents a single gym member's profile, lifecycle counters and
    variant-specific (regular or premium) state.
    """
    id: str
    name: str
    location: str
    phone: str
    email: str
    gender: Gender
    dob: str                    # e.g. '5-March-1998'
    membership_start_date: str  # same format as dob
    member_type: MemberType
    payload: Payload
    referral_source: str = ""
    paid_amount: float = 0.0    # amount recorded at creation
    attendance: int = 0
    loyalty_points: float = 0.0
    active_status: bool = False  # new members start inactive
    removal_reason: str = ""


def default_payload(member_type: MemberType) -> Payload:
    """Fresh default payload for a member variant."""
    if member_type is MemberType.REGULAR:
        return RegularPayload()
    return PremiumPayload()


def check_text(label: str, value, allow_comma: bool = True) -> str:
    """
    Normalizes a free-text field and rejects characters that cannot be stored.
    """
    text = "" if value is None else str(value).strip()
    if RECORD_DELIMITER in text or "\n" in text or "\r" in text:
        raise ValidationError(f"{label} cannot contain '{RECORD_DELIMITER}' or line breaks.")
    if not allow_comma and SUBFIELD_DELIMITER in text:
        raise ValidationError(f"{label} cannot contain '{SUBFIELD_DELIMITER}'.")
    return text


def check_date(label: str, value) -> str:
    """Requires a real 'D-Month-YYYY' date and returns it in canonical form."""
    text = check_text(label, value)
    if not text:
        raise ValidationError(f"{label} is required!")
    try:
        return parse_date(text)
    except ValueError:
        raise ValidationError(f"{label} must be a valid date like 5-March-1998!")


def check_amount(value, label: str = "Paid Amount") -> float:
    """Parses a non-negative finite money value."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a valid number!")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a valid number!")
    if not math.isfinite(amount):
        raise ValidationError(f"{label} must be a valid number!")
    if amount < 0:
        raise ValidationError(f"{label} cannot be negative!")
    return amount


def build_member(member_type: MemberType, payload: Payload, member_id, name, location, phone,
                 email, gender, dob, membership_start_date, referral_source="",
                 paid_amount=0.0) -> Member:
    """
    Validates the fields shared by every member and builds an inactive
    member with zeroed counters. Nothing is created if validation fails.

    Raises:
        ValidationError: On a missing or invalid required field.
    """
    clean_id = str(member_id or "").strip()
    if not clean_id:
        raise ValidationError("Member ID is required!")
    if not is_numeric_id(clean_id):
        raise ValidationError("Member ID must contain only numbers!")

    clean_name = check_text("Name", name)
    if not clean_name:
        raise ValidationError("Name is required!")

    return Member(
        id=clean_id,
        name=clean_name,
        location=check_text("Location", location),
        phone=check_text("Phone", phone),
        email=check_text("Email", email),
        gender=Gender.parse(gender),
        dob=check_date("Date of Birth", dob),
        membership_start_date=check_date("Membership Start Date", membership_start_date),
        member_type=member_type,
        payload=payload,
        referral_source=check_text("Referral Source", referral_source),
        paid_amount=check_amount(paid_amount),
    )
