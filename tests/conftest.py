import pytest

import config
from core.registry import MemberRegistry
from services.finance_service import new_premium_member
from services.plan_service import new_regular_member


@pytest.fixture(autouse=True)
def isolated_paths(monkeypatch, tmp_path):
    """Every test starts without a configured data folder and a private config file."""
    monkeypatch.setattr(config, "BASE_FOLDER", None)
    monkeypatch.setattr(config, "DATA_FILE", None)
    monkeypatch.setattr(config, "CARDS_FOLDER", None)
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / ".gym_members_config")


@pytest.fixture
def data_file(monkeypatch, tmp_path):
    path = tmp_path / "gym_members.txt"
    monkeypatch.setattr(config, "DATA_FILE", path)
    return path


def make_regular(member_id="1", plan="Basic", **overrides):
    fields = dict(
        member_id=member_id,
        name="Sara Khan",
        location="Kathmandu",
        phone="9800000000",
        email="sara@example.com",
        gender="Female",
        dob="5-March-1998",
        membership_start_date="1-January-2024",
        referral_source="Friend",
        paid_amount=1000.0,
        plan=plan,
    )
    fields.update(overrides)
    return new_regular_member(**fields)


def make_premium(member_id="2", trainer="Alex", paid_amount=0.0, **overrides):
    fields = dict(
        member_id=member_id,
        name="Ravi Shah",
        location="Pokhara",
        phone="9811111111",
        email="ravi@example.com",
        gender="Male",
        dob="12-July-1990",
        membership_start_date="3-February-2024",
        referral_source="",
        paid_amount=paid_amount,
        personal_trainer=trainer,
    )
    fields.update(overrides)
    return new_premium_member(**fields)


@pytest.fixture
def regular_member():
    return make_regular()


@pytest.fixture
def premium_member():
    return make_premium()


@pytest.fixture
def registry(regular_member, premium_member):
    return MemberRegistry([regular_member, premium_member])
