import pytest

from conftest import make_premium, make_regular
from core.errors import DuplicateIdError, MemberNotFoundError
from core.registry import MemberRegistry


def test_add_and_find():
    reg = MemberRegistry()
    m = make_regular(member_id="10")
    reg.add(m)
    assert reg.find("10") is m
    assert reg.find(" 10 ") is m
    assert reg.find("11") is None
    assert "10" in reg
    assert len(reg) == 1


def test_duplicate_id_leaves_registry_unchanged():
    reg = MemberRegistry([make_regular(member_id="1")])
    before = reg.list()
    with pytest.raises(DuplicateIdError) as exc:
        reg.add(make_premium(member_id="1"))
    assert exc.value.member_id == "1"
    assert reg.list() == before
    assert len(reg) == 1


def test_ids_stay_unique_over_many_adds():
    reg = MemberRegistry()
    for member_id in ["1", "2", "1", "3", "2", "4"]:
        try:
            reg.add(make_regular(member_id=member_id))
        except DuplicateIdError:
            pass
    ids = [m.id for m in reg]
    assert ids == ["1", "2", "3", "4"]
    assert len(set(ids)) == len(ids)


def test_remove():
    reg = MemberRegistry([make_regular(member_id="1"), make_premium(member_id="2")])
    assert reg.remove("1") is True
    assert reg.find("1") is None
    assert reg.remove("1") is False
    assert [m.id for m in reg] == ["2"]


def test_get_raises_when_missing():
    reg = MemberRegistry()
    with pytest.raises(MemberNotFoundError):
        reg.get("99")


def test_list_keeps_insertion_order_and_is_restartable():
    reg = MemberRegistry([make_regular(member_id="3"), make_premium(member_id="1"), make_regular(member_id="2")])
    first = [m.id for m in reg]
    second = [m.id for m in reg]
    assert first == second == ["3", "1", "2"]

    snapshot = reg.list()
    snapshot.clear()
    assert len(reg) == 3


def test_registries_are_independent():
    a = MemberRegistry([make_regular(member_id="1")])
    b = MemberRegistry()
    assert "1" in a
    assert "1" not in b
    b.add(make_regular(member_id="1"))
    a.clear()
    assert len(a) == 0
    assert len(b) == 1
