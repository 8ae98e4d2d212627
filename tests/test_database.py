import dataclasses
import logging

import pytest

import config
from conftest import make_premium, make_regular
from core.database import (
    HEADER_LINES, RecordFormatError, decode_member, encode_member, init_db, load_members,
    save_members,
)
from core.errors import ValidationError
from core.registry import MemberRegistry
from services.attendance_service import activate_membership, mark_attendance
from services.finance_service import calculate_discount, pay_due_amount

REGULAR_LINE = (
    "REGULAR|1|Sara Khan|Kathmandu|9800000000|sara@example.com|Female|5-March-1998|"
    "1-January-2024|Friend|1000.0|true|3|15.0|Basic,6500.0"
)
PREMIUM_LINE = (
    "PREMIUM|2|Ravi Shah|Pokhara|9811111111|ravi@example.com|Male|12-July-1990|"
    "3-February-2024||50000.0|false|0|0.0|Alex,true,500.0"
)


def test_encode_regular(regular_member):
    activate_membership(regular_member)
    for _ in range(3):
        mark_attendance(regular_member)
    assert encode_member(regular_member) == REGULAR_LINE


def test_encode_premium_writes_payment_tracker(premium_member):
    pay_due_amount(premium_member, 50000)
    calculate_discount(premium_member)
    assert encode_member(premium_member) == PREMIUM_LINE


def test_save_writes_header_then_members(tmp_path, registry):
    path = tmp_path / "members.txt"
    save_members(registry, path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[:3] == [
        "# GYM MEMBER DATABASE",
        "# FORMAT: TYPE|ID|NAME|LOCATION|PHONE|EMAIL|GENDER|DOB|MEMBERSHIP_START|REFERRAL|"
        "PAID_AMOUNT|ACTIVE|ATTENDANCE|LOYALTY|ADDITIONAL_DATA",
        "",
    ]
    assert [ln.split("|")[1] for ln in lines[3:]] == ["1", "2"]


def test_save_overwrites(tmp_path, registry):
    path = tmp_path / "members.txt"
    save_members(registry, path)
    registry.remove("1")
    save_members(registry, path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == len(HEADER_LINES) + 1
    assert lines[-1].startswith("PREMIUM|2|")


def test_save_defaults_to_configured_file(data_file, registry):
    assert save_members(registry) == data_file
    assert data_file.exists()


def test_save_without_any_path_configured(registry):
    with pytest.raises(ValueError):
        save_members(registry)


def test_save_failure_leaves_registry_alone(tmp_path, registry):
    with pytest.raises(OSError):
        save_members(registry, tmp_path / "missing" / "members.txt")
    assert [m.id for m in registry] == ["1", "2"]


def test_round_trip(tmp_path):
    reg = MemberRegistry()
    eligible = make_regular(member_id="1", plan="standard")
    activate_membership(eligible)
    for _ in range(31):
        mark_attendance(eligible)
    reg.add(eligible)
    reg.add(make_regular(member_id="5", referral_source="", location="Lakeside, Pokhara"))
    paid = make_premium(member_id="2", paid_amount=50000)
    calculate_discount(paid)
    reg.add(paid)
    reg.add(make_premium(member_id="3", paid_amount=12000.5))

    path = tmp_path / "members.txt"
    save_members(reg, path)
    loaded = load_members(path)

    assert [m.id for m in loaded] == ["1", "5", "2", "3"]
    for original, restored in zip(reg, loaded):
        assert dataclasses.asdict(restored) == dataclasses.asdict(original)


def test_load_missing_file_gives_empty_registry(tmp_path):
    reg = load_members(tmp_path / "nothing.txt")
    assert len(reg) == 0


def test_load_clears_existing_registry(tmp_path, registry):
    path = tmp_path / "members.txt"
    path.write_text("\n".join(HEADER_LINES + [PREMIUM_LINE]) + "\n", encoding="utf-8")
    same = load_members(path, registry)
    assert same is registry
    assert [m.id for m in registry] == ["2"]


def test_decode_restores_state():
    m = decode_member(REGULAR_LINE)
    assert m.active_status is True
    assert m.attendance == 3
    assert m.loyalty_points == 15
    assert m.payload.plan == "Basic"

    p = decode_member(PREMIUM_LINE)
    assert p.payload.personal_trainer == "Alex"
    assert p.payload.paid_amount == 50000
    assert p.payload.is_full_payment is True
    assert p.payload.discount_amount == 500


def test_decode_price_follows_plan_table():
    m = decode_member(REGULAR_LINE.replace("Basic,6500.0", "deluxe,1.0"))
    assert m.payload.plan == "Deluxe"
    assert m.payload.price == 18500


def test_decode_regular_eligibility_from_attendance():
    line = REGULAR_LINE.replace("|true|3|15.0|", "|true|30|150.0|")
    assert decode_member(line).payload.eligible_for_upgrade is True


def test_decode_premium_optional_trailing_fields():
    base = PREMIUM_LINE.rsplit("|", 1)[0]
    m = decode_member(base.replace("|50000.0|", "|0.0|") + "|Alex")
    assert m.payload.personal_trainer == "Alex"
    assert m.payload.is_full_payment is False
    assert m.payload.discount_amount == 0

    # Without the flag, a full stored payment still counts as complete
    m = decode_member(base + "|Alex")
    assert m.payload.is_full_payment is True
    assert m.payload.discount_amount == 0

    m = decode_member(base + "|Alex,true")
    assert m.payload.is_full_payment is True
    assert m.payload.discount_amount == 0


@pytest.mark.parametrize("line", [
    "REGULAR|1|Sara",
    REGULAR_LINE.replace("REGULAR|", "GOLD|", 1),
    REGULAR_LINE.replace("|true|", "|yes|"),
    REGULAR_LINE.replace("|3|", "|three|"),
    REGULAR_LINE.replace("|3|", "|-3|"),
    REGULAR_LINE.replace("|1000.0|", "|lots|"),
    REGULAR_LINE.replace("|15.0|", "|nan|"),
    PREMIUM_LINE.replace("Alex,true,500.0", "Alex,false,500.0"),
    PREMIUM_LINE.replace("Alex,true,500.0", "Alex,true,abc"),
    PREMIUM_LINE.replace("Alex,true,500.0", "Alex,false"),
    PREMIUM_LINE.replace("|50000.0|", "|0.0|").replace("Alex,true,500.0", "Alex,true"),
])
def test_decode_rejects_malformed_lines(line):
    with pytest.raises(RecordFormatError):
        decode_member(line)


@pytest.mark.parametrize("line", [
    REGULAR_LINE.replace("5-March-1998", "banana"),
    REGULAR_LINE.replace("1-January-2024", "31-February-2024"),
])
def test_decode_rejects_invalid_dates(line):
    with pytest.raises(ValidationError):
        decode_member(line)


def test_load_skips_bad_lines_and_keeps_going(tmp_path, caplog):
    path = tmp_path / "members.txt"
    path.write_text("\n".join([
        *HEADER_LINES,
        REGULAR_LINE,
        "REGULAR|9|short",
        REGULAR_LINE.replace("|1|", "|7|").replace("|3|", "|x|"),
        REGULAR_LINE,  # duplicate ID
        "",
        "# a comment",
        PREMIUM_LINE.replace("|50000.0|", "|70000.0|"),  # over the premium charge
        PREMIUM_LINE,
    ]) + "\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="core.database"):
        reg = load_members(path)

    assert [m.id for m in reg] == ["1", "2"]
    assert sum("Skipping line" in r.getMessage() for r in caplog.records) == 4


def test_load_defaults_to_configured_file(data_file, registry):
    save_members(registry)
    assert [m.id for m in load_members()] == ["1", "2"]


def test_init_db_creates_header_only_file(data_file, registry):
    init_db()
    assert data_file.read_text(encoding="utf-8").splitlines() == HEADER_LINES
    save_members(registry)
    init_db()
    assert len(load_members()) == 2


def test_load_uses_utf8(tmp_path):
    path = tmp_path / "members.txt"
    path.write_text(REGULAR_LINE.replace("Sara Khan", "Zoë Ångström") + "\n", encoding="utf-8")
    assert load_members(path).find("1").name == "Zoë Ångström"
    assert config.DATA_FILE is None
