from typing import Optional


class GymError(Exception):
    """
    Base class for every membership rule failure.
    The member service turns these into failed OperationResults.
    """


class ValidationError(GymError):
    """A required field is missing or has an invalid value."""


class DuplicateIdError(GymError):
    def __init__(self, member_id: str):
        super().__init__(f"Member ID {member_id} already exists. Each member must have a unique ID.")
        self.member_id = member_id


class MemberNotFoundError(GymError):
    def __init__(self, member_id: str, kind: Optional[str] = None):
        label = f"{kind} member" if kind else "Member"
        super().__init__(f"{label} with ID {member_id} not found!")
        self.member_id = member_id


class MemberInactiveError(GymError):
    def __init__(self, member_id: str):
        super().__init__(f"Member {member_id} is not active.")
        self.member_id = member_id


class WrongMemberTypeError(GymError):
    def __init__(self, member_id: str, expected: str):
        super().__init__(f"Member with ID {member_id} is not a {expected} member!")
        self.member_id = member_id
        self.expected = expected


# --- Regular plan upgrade ---

class NotEligibleError(GymError):
    def __init__(self, attendance_limit: int):
        super().__init__(
            f"Member is not eligible for plan upgrade. Need at least {attendance_limit} attendances."
        )
        self.attendance_limit = attendance_limit


class NoOpPlanError(GymError):
    def __init__(self, plan: str):
        super().__init__(f"Member is already subscribed to {plan} plan.")
        self.plan = plan


class InvalidPlanError(GymError):
    def __init__(self, plan: str, available):
        super().__init__(f"Invalid plan selected: {plan}. Available plans: {', '.join(available)}")
        self.plan = plan


# --- Premium payments ---

class AlreadyPaidError(GymError):
    def __init__(self):
        super().__init__("Payment is already complete. No due amount remaining.")


class OverPaymentError(GymError):
    """
    Raised when a payment would push the total past the premium charge.
    The payment is rejected as a whole; max_amount is what is still due.
    """
    def __init__(self, max_amount: float):
        super().__init__(
            f"Payment amount exceeds the premium charge. Maximum amount: {max_amount:.2f}"
        )
        self.max_amount = max_amount


class PaymentIncompleteError(GymError):
    def __init__(self):
        super().__init__("No discount available. Full payment is required to get a discount.")
