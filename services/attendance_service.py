import logging

import config
from models.member import Member, MemberType, default_payload

logger = logging.getLogger(__name__)


def activate_membership(member: Member) -> bool:
    """
    Activates the membership.

    Returns:
        bool: False if the member was already active (nothing changed).
    """
    if member.active_status:
        return False
    member.active_status = True
    return True


def deactivate_membership(member: Member) -> bool:
    """
    Deactivates the membership if it is currently active.

    Returns:
        bool: False if the member was already inactive.
    """
    if not member.active_status:
        return False
    member.active_status = False
    return True


def mark_attendance(member: Member) -> bool:
    """
    Records one visit for an active member and credits loyalty points.
    Regular members become upgrade-eligible once they reach the attendance limit.

    Args:
        member (Member): The member checking in.

    Returns:
        bool: True if the visit was counted, False for an inactive member.
    """
    if not member.active_status:
        return False

    member.attendance += 1
    if member.member_type is MemberType.REGULAR:
        member.loyalty_points += config.REGULAR_LOYALTY_POINTS
        if member.attendance >= member.payload.attendance_limit:
            member.payload.eligible_for_upgrade = True
    else:
        member.loyalty_points += config.PREMIUM_LOYALTY_POINTS
    return True


def reset_member(member: Member) -> None:
    """Puts the shared lifecycle state back to a new member's defaults."""
    member.active_status = False
    member.attendance = 0
    member.loyalty_points = 0.0


def revert_member(member: Member, reason: str) -> Member:
    """
    Resets the member and swaps in a fresh default payload for its variant,
    keeping identity and contact details. The removal reason is recorded.

    Returns:
        Member: The same object, now in its reverted state.
    """
    reset_member(member)
    member.payload = default_payload(member.member_type)
    member.removal_reason = reason
    logger.info("Reverted %s member %s: %s", member.member_type.value.lower(), member.id, reason)
    return member

