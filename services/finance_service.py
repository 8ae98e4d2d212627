import logging
from dataclasses import dataclass

import config
from core.errors import (
    AlreadyPaidError, OverPaymentError, PaymentIncompleteError, ValidationError,
    WrongMemberTypeError,
)
from models.member import Member, MemberType, PremiumPayload, build_member, check_amount, check_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentReceipt:
    """Outcome of an accepted premium payment."""
    amount: float
    paid_amount: float
    remaining: float
    completed: bool


def _premium_payload(member: Member) -> PremiumPayload:
    if member.member_type is not MemberType.PREMIUM:
        raise WrongMemberTypeError(member.id, "Premium")
    return member.payload


def new_premium_member(member_id, name, location, phone, email, gender, dob,
                       membership_start_date, referral_source="", paid_amount=0.0,
                       personal_trainer: str = "") -> Member:
    """
    Creates an inactive premium member.
    A positive initial paid amount goes through pay_due_amount, so it is
    subject to the same cap as any later payment.

    Raises:
        ValidationError: On a missing/invalid field or an empty trainer name.
        OverPaymentError: If the initial amount exceeds the premium charge.
    """
    trainer = check_text("Trainer's Name", personal_trainer, allow_comma=False)
    if not trainer:
        raise ValidationError("Trainer's Name is required for Premium Members!")

    member = build_member(
        MemberType.PREMIUM, PremiumPayload(personal_trainer=trainer), member_id, name,
        location, phone, email, gender, dob, membership_start_date, referral_source, paid_amount,
    )
    if member.paid_amount > 0:
        pay_due_amount(member, member.paid_amount)
    return member


def pay_due_amount(member: Member, amount) -> PaymentReceipt:
    """
    Adds a payment towards the premium charge.

    Unpaid -> PartiallyPaid -> FullyPaid, forward only. A payment that would
    exceed the charge is rejected whole; nothing is applied.

    Args:
        member (Member): A premium member.
        amount: Amount paid now. Must be greater than zero.

    Returns:
        PaymentReceipt: Totals after the payment.

    Raises:
        ValidationError: If the amount is not a positive number.
        AlreadyPaidError: If the charge is already fully paid.
        OverPaymentError: If the new total would exceed the charge.
    """
    payload = _premium_payload(member)
    value = check_amount(amount)
    if value <= 0:
        raise ValidationError("Paid Amount must be greater than zero!")

    if payload.is_full_payment:
        raise AlreadyPaidError()

    new_total = payload.paid_amount + value
    if new_total > payload.premium_charge:
        raise OverPaymentError(payload.premium_charge - payload.paid_amount)

    payload.paid_amount = new_total
    if payload.paid_amount >= payload.premium_charge:
        payload.is_full_payment = True
        logger.info("Premium member %s is now fully paid", member.id)

    return PaymentReceipt(
        amount=value,
        paid_amount=payload.paid_amount,
        remaining=payload.remaining_amount,
        completed=payload.is_full_payment,
    )


def calculate_discount(member: Member) -> float:
    """
    Grants the full-payment discount: DISCOUNT_RATE (1%) of the premium charge.

    Raises:
        PaymentIncompleteError: If the member has not paid in full.
    """
    payload = _premium_payload(member)
    if not payload.is_full_payment:
        raise PaymentIncompleteError()
    payload.discount_amount = payload.premium_charge * config.DISCOUNT_RATE
    return payload.discount_amount


def calculate_fee(member: Member) -> float:
    """
    Membership fee: the plan price for regular members, the premium charge
    less any discount for premium members.
    """
    if member.member_type is MemberType.REGULAR:
        return member.payload.price
    return member.payload.premium_charge - member.payload.discount_amount
