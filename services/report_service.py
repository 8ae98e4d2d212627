from typing import Dict, List

from core.registry import MemberRegistry
from core.utils import format_amount
from models.member import Member, MemberType
from services.finance_service import calculate_fee


def format_member_info(member: Member) -> str:
    """
    Formats a member's details as labelled lines ("Label: value").
    Money is shown with two decimals.
    """
    lines = [
        f"ID: {member.id}",
        f"Name: {member.name}",
        f"Location: {member.location}",
        f"Phone: {member.phone}",
        f"Email: {member.email}",
        f"Gender: {member.gender.value}",
        f"Date of Birth: {member.dob}",
        f"Membership Start Date: {member.membership_start_date}",
        f"Referral Source: {member.referral_source}",
        f"Active Status: {'Active' if member.active_status else 'Inactive'}",
        f"Attendance: {member.attendance}",
        f"Loyalty Points: {member.loyalty_points:g}",
    ]

    p = member.payload
    if member.member_type is MemberType.REGULAR:
        lines += [
            "Member Type: Regular Member",
            f"Paid Amount: {format_amount(member.paid_amount)}",
            f"Plan: {p.plan}",
            f"Price: {format_amount(p.price)}",
            f"Eligible For Upgrade: {'Yes' if p.eligible_for_upgrade else 'No'}",
        ]
    else:
        lines += [
            "Member Type: Premium Member",
            f"Trainer: {p.personal_trainer}",
            f"Premium Charge: {format_amount(p.premium_charge)}",
            f"Paid Amount: {format_amount(p.paid_amount)}",
            f"Remaining Amount: {format_amount(p.remaining_amount)}",
            f"Full Payment: {'Yes' if p.is_full_payment else 'No'}",
            f"Discount Amount: {format_amount(p.discount_amount)}",
        ]

    lines.append(f"Fee: {format_amount(calculate_fee(member))}")
    if member.removal_reason:
        lines.append(f"Removal Reason: {member.removal_reason}")
    return "\n".join(lines)


def summarize_registry(registry: MemberRegistry) -> Dict[str, int]:
    """Counts used by the members overview."""
    members = registry.list()
    regular = [m for m in members if m.member_type is MemberType.REGULAR]
    premium = [m for m in members if m.member_type is MemberType.PREMIUM]
    return {
        "total": len(members),
        "regular": len(regular),
        "premium": len(premium),
        "active": sum(1 for m in members if m.active_status),
        "upgrade_eligible": sum(1 for m in regular if m.payload.eligible_for_upgrade),
        "fully_paid": sum(1 for m in premium if m.payload.is_full_payment),
    }


def generate_members_brief(registry: MemberRegistry) -> str:
    """
    Short text overview of the registry: counts first, then one line per member.
    """
    counts = summarize_registry(registry)

    lines: List[str] = []
    lines.append(f"MEMBERS OVERVIEW ({counts['total']} total)")
    lines.append("-" * 40)

    if counts["total"] == 0:
        lines.append("No members registered yet.")
        return "\n".join(lines)

    lines.append(f"Regular: {counts['regular']}  |  Premium: {counts['premium']}  |  Active: {counts['active']}")
    lines.append(f"Ready for upgrade: {counts['upgrade_eligible']}  |  Fully paid: {counts['fully_paid']}")
    lines.append("")

    for m in registry:
        status = "Active" if m.active_status else "Inactive"
        lines.append(f"{m.id} | {m.name} | {m.member_type.value.title()} | {status}")

    return "\n".join(lines)
