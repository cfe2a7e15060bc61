"""Reservation state machine: reserve / unreserve rules."""

import pytest
from sqlmodel import Session

from conftest import add_gift, auth, create_family, join_family
from gifthub.database import engine
from gifthub.errors import ConflictError
from gifthub.models.gift import Gift
from gifthub.models.user import User
from gifthub.services import auth_service
from gifthub.services.reservation_service import reserve_gift


@pytest.fixture
def family(client):
    alice = create_family(client, "Smiths", "Alice")
    code = alice["family"]["code"]
    bob = join_family(client, code, "Bob")
    carol = join_family(client, code, "Carol")
    return alice, bob, carol


def reserve(client, member, gift_id):
    return client.post(f"/api/gifts/{gift_id}/reserve", headers=auth(member["token"]))


def unreserve(client, member, gift_id):
    return client.post(f"/api/gifts/{gift_id}/unreserve", headers=auth(member["token"]))


def test_reserve_sets_reserver(client, family):
    alice, bob, _ = family
    gift = add_gift(client, bob["token"], title="Bike")

    r = reserve(client, alice, gift["id"])

    assert r.status_code == 200
    assert r.json()["reserved_by_user_id"] == alice["user"]["id"]


def test_cannot_reserve_own_gift(client, family):
    alice, _, _ = family
    gift = add_gift(client, alice["token"], title="Socks")

    r = reserve(client, alice, gift["id"])

    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"


def test_reserve_taken_gift_conflicts(client, family):
    alice, bob, carol = family
    gift = add_gift(client, bob["token"], title="Bike")
    reserve(client, alice, gift["id"])

    r = reserve(client, carol, gift["id"])

    assert r.status_code == 409
    assert r.json()["error"] == "conflict"


def test_reserve_again_by_same_user_is_noop(client, family):
    alice, bob, _ = family
    gift = add_gift(client, bob["token"], title="Bike")
    reserve(client, alice, gift["id"])

    r = reserve(client, alice, gift["id"])

    assert r.status_code == 200
    assert r.json()["reserved_by_user_id"] == alice["user"]["id"]


def test_reserve_other_family_gift_forbidden(client, family):
    _, bob, _ = family
    stranger = create_family(client, "Joneses", "Jim")
    gift = add_gift(client, bob["token"], title="Bike")

    assert reserve(client, stranger, gift["id"]).status_code == 403
    assert unreserve(client, stranger, gift["id"]).status_code == 403


def test_reserve_missing_gift(client, family):
    alice, _, _ = family
    assert reserve(client, alice, "gft_missing").status_code == 404
    assert unreserve(client, alice, "gft_missing").status_code == 404


def test_unreserve_clears_reserver(client, family):
    alice, bob, _ = family
    gift = add_gift(client, bob["token"], title="Bike")
    reserve(client, alice, gift["id"])

    r = unreserve(client, alice, gift["id"])

    assert r.status_code == 200
    assert r.json()["reserved_by_user_id"] is None


def test_unreserve_twice_fails(client, family):
    alice, bob, _ = family
    gift = add_gift(client, bob["token"], title="Bike")
    reserve(client, alice, gift["id"])
    unreserve(client, alice, gift["id"])

    r = unreserve(client, alice, gift["id"])

    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"


def test_only_reserver_can_unreserve(client, family):
    alice, bob, carol = family
    gift = add_gift(client, bob["token"], title="Bike")
    reserve(client, alice, gift["id"])

    assert unreserve(client, carol, gift["id"]).status_code == 403
    # The owner cannot force it either
    assert unreserve(client, bob, gift["id"]).status_code == 403

    r = client.get("/api/family/lists", headers=auth(carol["token"]))
    [listed] = r.json()["gifts"]
    assert listed["reserved_by_user_id"] == alice["user"]["id"]


def test_released_gift_can_be_reserved_by_someone_else(client, family):
    alice, bob, carol = family
    gift = add_gift(client, bob["token"], title="Bike")
    reserve(client, alice, gift["id"])
    unreserve(client, alice, gift["id"])

    r = reserve(client, carol, gift["id"])

    assert r.status_code == 200
    assert r.json()["reserved_by_user_id"] == carol["user"]["id"]


def test_owner_edit_keeps_reservation(client, family):
    alice, bob, _ = family
    gift = add_gift(client, bob["token"], title="Bike")
    reserve(client, alice, gift["id"])

    r = client.patch(f"/api/gifts/{gift['id']}", json={"title": "Blue bike"}, headers=auth(bob["token"]))

    assert r.json()["reserved_by_user_id"] == alice["user"]["id"]


def test_reserve_loses_race_to_concurrent_reserver(client, family):
    alice, bob, carol = family
    gift = add_gift(client, bob["token"], title="Bike")

    with Session(engine) as alice_session:
        alice_user = alice_session.get(User, alice["user"]["id"])
        # Alice's session has already seen the gift unreserved
        assert alice_session.get(Gift, gift["id"]).reserved_by_user_id is None

        with Session(engine) as carol_session:
            reserve_gift(carol_session.get(User, carol["user"]["id"]), gift["id"], carol_session)

        with pytest.raises(ConflictError):
            reserve_gift(alice_user, gift["id"], alice_session)

    r = client.get("/api/family/lists", headers=auth(bob["token"]))
    assert r.json()["gifts"][0]["reserved_by_user_id"] == carol["user"]["id"]


def test_smiths_scenario(client, monkeypatch):
    monkeypatch.setattr(auth_service, "generate_family_code", lambda: "ABC234")

    alice = create_family(client, "Smiths", "Alice")
    assert alice["family"]["code"] == "ABC234"

    bob = join_family(client, "abc234 ", "Bob")
    assert bob["family"]["id"] == alice["family"]["id"]

    bike = add_gift(client, bob["token"], title="Bike")
    assert bike["priority"] == "medium"

    r = reserve(client, alice, bike["id"])
    assert r.status_code == 200
    assert r.json()["reserved_by_user_id"] == alice["user"]["id"]

    socks = add_gift(client, alice["token"], title="Socks")
    r = reserve(client, alice, socks["id"])
    assert r.status_code == 400

    r = unreserve(client, bob, bike["id"])
    assert r.status_code == 403

    r = unreserve(client, alice, bike["id"])
    assert r.status_code == 200
    assert r.json()["reserved_by_user_id"] is None
