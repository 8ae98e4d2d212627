import logging
from typing import Optional, Tuple

import config
from core.errors import (
    InvalidPlanError, NoOpPlanError, NotEligibleError, ValidationError, WrongMemberTypeError,
)
from models.member import Member, MemberType, RegularPayload, build_member, check_text

logger = logging.getLogger(__name__)


def normalize_plan(plan: str) -> Optional[str]:
    """
    Maps a plan name in any casing to its canonical spelling.
    Example: 'deluxe' -> 'Deluxe'. Returns None for an unknown plan.
    """
    clean = str(plan or "").strip().lower()
    for name in config.PLAN_PRICES:
        if name.lower() == clean:
            return name
    return None


def plan_price(plan: str) -> Optional[float]:
    """Price of a plan from the fixed price table, or None if the plan does not exist."""
    name = normalize_plan(plan)
    return config.PLAN_PRICES[name] if name else None


def new_regular_member(member_id, name, location, phone, email, gender, dob,
                       membership_start_date, referral_source="", paid_amount=0.0,
                       plan: Optional[str] = None) -> Member:
    """
    Creates an inactive regular member. An empty plan means the Basic plan.

    Raises:
        ValidationError: On a missing/invalid field or an unknown plan.
    """
    payload = RegularPayload()
    if plan is not None and str(plan).strip():
        canonical = normalize_plan(check_text("Plan", plan, allow_comma=False))
        if canonical is None:
            raise ValidationError(
                f"Invalid plan selected: {plan}. Available plans: {', '.join(config.PLAN_PRICES)}"
            )
        payload.plan = canonical
        payload.price = config.PLAN_PRICES[canonical]

    return build_member(
        MemberType.REGULAR, payload, member_id, name, location, phone, email, gender,
        dob, membership_start_date, referral_source, paid_amount,
    )


def check_upgrade_eligibility(member: Member) -> bool:
    """
    Re-evaluates eligibility from the current attendance.
    Eligibility only ever switches on here; revert is the only way back.
    """
    payload = member.payload
    if member.attendance >= payload.attendance_limit:
        payload.eligible_for_upgrade = True
    return payload.eligible_for_upgrade


def upgrade_plan(member: Member, new_plan: str) -> Tuple[str, float]:
    """
    Moves a regular member to another plan.

    Checks are applied in this order: eligibility, same plan, unknown plan.

    Returns:
        Tuple[str, float]: The new plan and its price.

    Raises:
        WrongMemberTypeError: If the member is not a regular member.
        NotEligibleError: Below the attendance limit.
        NoOpPlanError: The member is already on that plan.
        InvalidPlanError: The plan is not in the price table.
    """
    if member.member_type is not MemberType.REGULAR:
        raise WrongMemberTypeError(member.id, "Regular")

    payload = member.payload
    if not check_upgrade_eligibility(member):
        raise NotEligibleError(payload.attendance_limit)

    requested = str(new_plan or "").strip()
    if requested.lower() == payload.plan.lower():
        raise NoOpPlanError(payload.plan)

    name = normalize_plan(requested)
    if name is None:
        raise InvalidPlanError(requested, list(config.PLAN_PRICES))

    old_plan = payload.plan
    payload.plan = name
    payload.price = config.PLAN_PRICES[name]
    logger.info("Member %s upgraded from %s to %s", member.id, old_plan, name)
    return payload.plan, payload.price
