import logging
import math
from pathlib import Path
from typing import List, Optional, Union

import config
from core.errors import GymError
from core.registry import MemberRegistry
from models.member import Member, MemberType, RECORD_DELIMITER, SUBFIELD_DELIMITER
from services.finance_service import new_premium_member
from services.plan_service import check_upgrade_eligibility, new_regular_member

logger = logging.getLogger(__name__)

FIELD_NAMES = [
    "TYPE", "ID", "NAME", "LOCATION", "PHONE", "EMAIL", "GENDER", "DOB",
    "MEMBERSHIP_START", "REFERRAL", "PAID_AMOUNT", "ACTIVE", "ATTENDANCE",
    "LOYALTY", "ADDITIONAL_DATA",
]
MIN_FIELDS = len(FIELD_NAMES)

HEADER_LINES = [
    "# GYM MEMBER DATABASE",
    "# FORMAT: " + RECORD_DELIMITER.join(FIELD_NAMES),
    "",
]

PathLike = Union[str, Path]


class RecordFormatError(ValueError):
    """A data line that cannot be turned back into a member."""


def _resolve(path: Optional[PathLike]) -> Path:
    target = path if path is not None else config.DATA_FILE
    if not target:
        raise ValueError("Data file path not set. Call init_paths() first.")
    return Path(target)


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _parse_bool(text: str) -> bool:
    clean = text.strip().lower()
    if clean == "true":
        return True
    if clean == "false":
        return False
    raise RecordFormatError(f"Not a boolean: {text!r}")


def _parse_float(text: str, label: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise RecordFormatError(f"{label} is not a number: {text!r}")
    if not math.isfinite(value):
        raise RecordFormatError(f"{label} is not a number: {text!r}")
    return value


def _parse_count(text: str, label: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise RecordFormatError(f"{label} is not a whole number: {text!r}")
    if value < 0:
        raise RecordFormatError(f"{label} cannot be negative: {value}")
    return value


# --- ENCODING ---

def encode_member(member: Member) -> str:
    """
    Serializes one member to a single record line (no trailing newline).

    Premium records store the cumulative payment tracker in PAID_AMOUNT.
    """
    p = member.payload
    if member.member_type is MemberType.REGULAR:
        paid = member.paid_amount
        extra = [p.plan, str(float(p.price))]
    else:
        paid = p.paid_amount
        extra = [p.personal_trainer, _format_bool(p.is_full_payment), str(float(p.discount_amount))]

    fields = [
        member.member_type.value,
        member.id,
        member.name,
        member.location,
        member.phone,
        member.email,
        member.gender.value,
        member.dob,
        member.membership_start_date,
        member.referral_source,
        str(float(paid)),
        _format_bool(member.active_status),
        str(member.attendance),
        str(float(member.loyalty_points)),
        SUBFIELD_DELIMITER.join(extra),
    ]
    return RECORD_DELIMITER.join(fields)


def save_members(registry: MemberRegistry, path: Optional[PathLike] = None) -> Path:
    """
    Writes the whole registry to the data file, replacing its previous contents.

    Args:
        registry (MemberRegistry): Members to store, in order.
        path: Target file. Defaults to config.DATA_FILE.

    Returns:
        Path: The file written.

    Raises:
        OSError: If the file cannot be opened or written. The registry is not touched.
    """
    target = _resolve(path)
    lines = HEADER_LINES + [encode_member(m) for m in registry]

    with open(target, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    logger.info("Saved %d members to %s", len(registry), target)
    return target


# --- DECODING ---

def decode_member(line: str) -> Member:
    """
    Rebuilds a member from one record line.

    Missing trailing premium sub-fields (full payment flag, discount) keep
    their defaults.

    Raises:
        RecordFormatError: On a short line, unknown type tag or malformed value.
        GymError: If the stored values fail member validation.
    """
    parts = line.rstrip("\r\n").split(RECORD_DELIMITER)
    if len(parts) < MIN_FIELDS:
        raise RecordFormatError(f"Expected {MIN_FIELDS} fields, found {len(parts)}")

    (tag, member_id, name, location, phone, email, gender, dob, start,
     referral, paid_text, active_text, attendance_text, loyalty_text, additional) = parts[:MIN_FIELDS]

    try:
        member_type = MemberType(tag.strip())
    except ValueError:
        raise RecordFormatError(f"Unknown member type: {tag!r}")

    paid_amount = _parse_float(paid_text, "Paid amount")
    active = _parse_bool(active_text)
    attendance = _parse_count(attendance_text, "Attendance")
    loyalty = _parse_float(loyalty_text, "Loyalty points")
    if loyalty < 0:
        raise RecordFormatError(f"Loyalty points cannot be negative: {loyalty}")
    sub = additional.split(SUBFIELD_DELIMITER)

    common = dict(
        member_id=member_id, name=name, location=location, phone=phone, email=email,
        gender=gender, dob=dob, membership_start_date=start, referral_source=referral,
        paid_amount=paid_amount,
    )

    if member_type is MemberType.REGULAR:
        # Price is derived from the plan table, the stored copy is informational
        member = new_regular_member(plan=sub[0], **common)
    else:
        member = new_premium_member(personal_trainer=sub[0], **common)
        payload = member.payload
        if len(sub) > 1 and sub[1].strip():
            full = _parse_bool(sub[1])
            if full != (payload.paid_amount >= payload.premium_charge):
                raise RecordFormatError(
                    f"Full payment flag {sub[1].strip()!r} does not match paid amount {payload.paid_amount}"
                )
            payload.is_full_payment = full
        if len(sub) > 2 and sub[2].strip():
            discount = _parse_float(sub[2], "Discount amount")
            if discount < 0 or (discount and not payload.is_full_payment):
                raise RecordFormatError(f"Discount {discount} is not allowed for this payment state")
            payload.discount_amount = discount

    member.attendance = attendance
    member.loyalty_points = loyalty
    member.active_status = active
    if member.member_type is MemberType.REGULAR:
        check_upgrade_eligibility(member)
    return member


def load_members(path: Optional[PathLike] = None,
                 registry: Optional[MemberRegistry] = None) -> MemberRegistry:
    """
    Reads the data file into a registry.

    The registry (a new one if not given) is cleared first. A missing file is
    a first run and gives an empty registry. Blank lines and '#' comments are
    ignored. A line that cannot be decoded, or that repeats an ID, is skipped
    with a warning and the rest of the file is still loaded.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    source = _resolve(path)
    if registry is None:
        registry = MemberRegistry()
    registry.clear()

    if not source.exists():
        logger.info("Data file %s not found. Starting with empty database.", source)
        return registry

    skipped: List[int] = []
    with open(source, "r", encoding="utf-8") as f:
        for line_no, raw in enumerate(f, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip() or line.startswith("#"):
                continue
            try:
                registry.add(decode_member(line))
            except (ValueError, GymError) as e:
                skipped.append(line_no)
                logger.warning("Skipping line %d of %s: %s", line_no, source, e)

    logger.info("Loaded %d members from %s", len(registry), source)
    if skipped:
        logger.warning("%d invalid line(s) skipped: %s", len(skipped), skipped)
    return registry


def init_db(path: Optional[PathLike] = None) -> Path:
    """
    Creates the data file with just the header if it does not exist yet.
    """
    target = _resolve(path)
    if not target.exists():
        save_members(MemberRegistry(), target)
    return target
