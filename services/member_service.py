import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import config
from core.database import load_members, save_members
from core.errors import DuplicateIdError, GymError, MemberInactiveError, MemberNotFoundError, ValidationError
from core.registry import MemberRegistry
from core.utils import format_amount
from models.member import Member, MemberType
from services.attendance_service import (
    activate_membership, deactivate_membership, mark_attendance, revert_member,
)
from services.finance_service import (
    calculate_discount, new_premium_member, pay_due_amount,
)
from services.pdf_service import export_member_cards
from services.plan_service import new_regular_member, upgrade_plan

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """
    What every member operation hands back to the caller.

    Attributes:
        success (bool): Whether the operation went through.
        message (str): Text suitable for showing to staff.
        member (Member, optional): The member the operation acted on.
        data (dict): Operation-specific values (new plan, remaining balance, ...).
        error (GymError, optional): The typed failure when success is False.
    """
    success: bool
    message: str
    member: Optional[Member] = None
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[GymError] = None

    @classmethod
    def ok(cls, message: str, member: Optional[Member] = None, **data) -> "OperationResult":
        return cls(True, message, member, data)

    @classmethod
    def fail(cls, error: GymError, member: Optional[Member] = None) -> "OperationResult":
        return cls(False, str(error), member, error=error)


def _persist(registry: MemberRegistry) -> None:
    """Saves after a mutation when a data file is configured."""
    if config.DATA_FILE:
        save_members(registry, config.DATA_FILE)


def _run(registry: MemberRegistry, action: Callable[[], OperationResult]) -> OperationResult:
    """
    Runs one operation, turning rule failures into a failed result.
    Successful operations are persisted; OSError from saving propagates.
    """
    try:
        result = action()
    except GymError as e:
        logger.info("Operation rejected: %s", e)
        return OperationResult.fail(e)
    if result.success:
        _persist(registry)
    return result


# --- REGISTRATION ---

def _check_new_id(registry: MemberRegistry, member_id) -> None:
    # Duplicate IDs are refused before any other field is looked at
    clean_id = str(member_id or "").strip()
    if clean_id and clean_id in registry:
        raise DuplicateIdError(clean_id)


def create_regular_member(registry: MemberRegistry, member_id, name, location="", phone="",
                          email="", gender=None, dob="", membership_start_date="",
                          referral_source="", paid_amount=0.0, plan=None) -> OperationResult:
    """
    Validates and registers a new (inactive) regular member.
    """
    def action():
        _check_new_id(registry, member_id)
        member = new_regular_member(
            member_id, name, location, phone, email, gender, dob,
            membership_start_date, referral_source, paid_amount, plan,
        )
        registry.add(member)
        logger.info("Regular member added: %s (%s)", member.id, member.name)
        return OperationResult.ok("Regular Member added successfully!", member)

    return _run(registry, action)


def create_premium_member(registry: MemberRegistry, member_id, name, location="", phone="",
                          email="", gender=None, dob="", membership_start_date="",
                          referral_source="", paid_amount=0.0,
                          personal_trainer="") -> OperationResult:
    """
    Validates and registers a new (inactive) premium member.
    A positive paid amount is applied as the first payment.
    """
    def action():
        _check_new_id(registry, member_id)
        member = new_premium_member(
            member_id, name, location, phone, email, gender, dob,
            membership_start_date, referral_source, paid_amount, personal_trainer,
        )
        registry.add(member)
        logger.info("Premium member added: %s (%s)", member.id, member.name)
        return OperationResult.ok("Premium Member added successfully!", member)

    return _run(registry, action)


# --- LIFECYCLE ---

def _lookup(registry: MemberRegistry, member_id) -> Member:
    clean_id = str(member_id or "").strip()
    if not clean_id:
        raise ValidationError("Please enter Member ID!")
    return registry.get(clean_id)


def activate_member(registry: MemberRegistry, member_id) -> OperationResult:
    """
    Activates a membership. An already active member is reported as such
    (success=False, no error) and nothing is saved.
    """
    def action():
        member = _lookup(registry, member_id)
        if not activate_membership(member):
            return OperationResult(False, "The user is already activated.", member,
                                   {"already_active": True})
        logger.info("Membership activated for member ID: %s", member.id)
        return OperationResult.ok(f"Membership activated successfully for ID: {member.id}", member)

    return _run(registry, action)


def deactivate_member(registry: MemberRegistry, member_id) -> OperationResult:
    def action():
        member = _lookup(registry, member_id)
        if not deactivate_membership(member):
            return OperationResult(False, "The user is already deactivated.", member,
                                   {"already_inactive": True})
        logger.info("Membership deactivated for member ID: %s", member.id)
        return OperationResult.ok(f"Membership deactivated successfully for ID: {member.id}", member)

    return _run(registry, action)


def mark_member_attendance(registry: MemberRegistry, member_id) -> OperationResult:
    """
    Counts a visit. Inactive members are refused with MemberInactiveError.
    """
    def action():
        member = _lookup(registry, member_id)
        if not mark_attendance(member):
            raise MemberInactiveError(member.id)
        return OperationResult.ok(
            f"Attendance marked successfully for ID: {member.id}", member,
            attendance=member.attendance, loyalty_points=member.loyalty_points,
        )

    return _run(registry, action)


# --- REGULAR PLANS ---

def upgrade_member_plan(registry: MemberRegistry, member_id, new_plan) -> OperationResult:
    def action():
        member = _lookup(registry, member_id)
        plan, price = upgrade_plan(member, new_plan)
        return OperationResult.ok(
            f"Plan successfully upgraded to {plan} with price {format_amount(price)}",
            member, plan=plan, price=price,
        )

    return _run(registry, action)


# --- PREMIUM PAYMENTS ---

def pay_member_due_amount(registry: MemberRegistry, member_id, amount) -> OperationResult:
    def action():
        member = _lookup(registry, member_id)
        receipt = pay_due_amount(member, amount)
        if receipt.completed:
            message = "Payment successful! Your membership is now fully paid."
        else:
            message = f"Payment successful! Remaining amount to be paid: {format_amount(receipt.remaining)}"
        return OperationResult.ok(
            message, member, paid_amount=receipt.paid_amount,
            remaining=receipt.remaining, completed=receipt.completed,
        )

    return _run(registry, action)


def calculate_member_discount(registry: MemberRegistry, member_id) -> OperationResult:
    def action():
        member = _lookup(registry, member_id)
        discount = calculate_discount(member)
        return OperationResult.ok(
            f"Discount calculated successfully! You received a discount of {format_amount(discount)}",
            member, discount_amount=discount,
        )

    return _run(registry, action)


# --- REMOVAL ---

def _revert(registry: MemberRegistry, member_id, reason, member_type: MemberType) -> OperationResult:
    kind = member_type.value.title()

    def action():
        clean_id = str(member_id or "").strip()
        if not clean_id:
            raise ValidationError("Please enter Member ID!")
        clean_reason = str(reason or "").strip()
        if not clean_reason:
            raise ValidationError("Please enter a removal reason!")

        member = registry.find(clean_id)
        if member is None or member.member_type is not member_type:
            raise MemberNotFoundError(clean_id, kind)

        revert_member(member, clean_reason)
        registry.remove(member.id)
        return OperationResult.ok(
            f"{kind} Member with ID {member.id} has been removed.", member,
            removal_reason=clean_reason,
        )

    return _run(registry, action)


def revert_regular_member(registry: MemberRegistry, member_id, reason) -> OperationResult:
    """Resets a regular member to defaults and drops it from the registry."""
    return _revert(registry, member_id, reason, MemberType.REGULAR)


def revert_premium_member(registry: MemberRegistry, member_id, reason) -> OperationResult:
    """Resets a premium member to defaults and drops it from the registry."""
    return _revert(registry, member_id, reason, MemberType.PREMIUM)


# --- LISTING & STORAGE ---

def list_members(registry: MemberRegistry, member_type: Optional[MemberType] = None) -> List[Member]:
    """All members in registration order, optionally only one variant."""
    members = registry.list()
    if member_type is not None:
        members = [m for m in members if m.member_type is member_type]
    return members


def save_registry(registry: MemberRegistry, path: Optional[Path] = None) -> Path:
    """
    Writes the registry to disk (config.DATA_FILE by default).
    OSError propagates; the registry is left as it was.
    """
    return save_members(registry, path)


def load_registry(path: Optional[Path] = None,
                  registry: Optional[MemberRegistry] = None) -> MemberRegistry:
    """Reads the data file (config.DATA_FILE by default) into a registry."""
    return load_members(path, registry)


def export_cards(registry: MemberRegistry, folder: Optional[Path] = None) -> OperationResult:
    """
    Writes a PDF card for every member (config.CARDS_FOLDER by default).
    Nothing in the registry changes, so nothing is saved. OSError propagates.
    """
    paths = export_member_cards(registry, folder)
    return OperationResult.ok(f"Exported {len(paths)} member card(s).", paths=paths)
