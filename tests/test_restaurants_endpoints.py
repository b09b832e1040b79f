"""
Restaurant endpoints: manager-only creation and creator-OR-manager mutation.
"""

import uuid

import pytest

from resto_backend.models.auth import User
from resto_backend.models.platform import Company, Restaurant


def _set_manager(db_session, company_id, user_id):
    """Hand company management to another user outside the API."""
    company = db_session.get(Company, uuid.UUID(company_id))
    company.manager_id = uuid.UUID(user_id)
    db_session.commit()


@pytest.fixture
def manager(register_user):
    return register_user(name="Manager")


@pytest.fixture
def company(client, manager):
    response = client.post(
        "/api/companies",
        json={"name": "Acme", "tax_id": "12345678000123"},
        headers=manager.headers,
    )
    return response.json()


@pytest.fixture
def restaurant(client, manager, company):
    response = client.post(
        "/api/restaurants",
        json={"name": "Downtown", "place": "Main St", "company_id": company["id"]},
        headers=manager.headers,
    )
    return response.json()


class TestCreateRestaurant:
    def test_manager_creates(self, client, manager, company):
        response = client.post(
            "/api/restaurants",
            json={"name": "Harbor", "place": "Pier 4", "company_id": company["id"]},
            headers=manager.headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["creator_id"] == manager.id
        assert body["company_id"] == company["id"]

    def test_non_manager_denied(self, client, register_user, company, db_session):
        other = register_user()
        response = client.post(
            "/api/restaurants",
            json={"name": "Rogue", "place": "Side St", "company_id": company["id"]},
            headers=other.headers,
        )
        assert response.status_code == 403
        assert db_session.query(Restaurant).count() == 0

    def test_unknown_company_is_404(self, client, manager):
        response = client.post(
            "/api/restaurants",
            json={"name": "Ghost", "place": "Nowhere", "company_id": str(uuid.uuid4())},
            headers=manager.headers,
        )
        assert response.status_code == 404

    def test_place_required(self, client, manager, company):
        response = client.post(
            "/api/restaurants",
            json={"name": "Harbor", "company_id": company["id"]},
            headers=manager.headers,
        )
        assert response.status_code == 400


class TestReadRestaurants:
    def test_listing_needs_no_ownership(self, client, register_user, restaurant):
        viewer = register_user()
        response = client.get("/api/restaurants", headers=viewer.headers)
        assert [r["id"] for r in response.json()] == [restaurant["id"]]

    def test_my_restaurants(self, client, register_user, manager, restaurant):
        viewer = register_user()
        mine = client.get("/api/restaurants/my-restaurants", headers=manager.headers)
        assert [r["id"] for r in mine.json()] == [restaurant["id"]]
        assert client.get("/api/restaurants/my-restaurants", headers=viewer.headers).json() == []

    def test_by_company(self, client, register_user, company, restaurant):
        viewer = register_user()
        response = client.get(f"/api/restaurants/company/{company['id']}", headers=viewer.headers)
        assert [r["id"] for r in response.json()] == [restaurant["id"]]

        empty = client.get(f"/api/restaurants/company/{uuid.uuid4()}", headers=viewer.headers)
        assert empty.status_code == 200
        assert empty.json() == []

    def test_read_one(self, client, manager, restaurant):
        response = client.get(f"/api/restaurants/{restaurant['id']}", headers=manager.headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Downtown"

    def test_read_one_includes_creator_company_and_staff(
        self, client, register_user, db_session, manager, company, restaurant
    ):
        cook = register_user(name="Cook")
        staff = db_session.get(User, uuid.UUID(cook.id))
        staff.restaurant_id = uuid.UUID(restaurant["id"])
        db_session.commit()

        body = client.get(f"/api/restaurants/{restaurant['id']}", headers=cook.headers).json()
        assert body["creator"]["id"] == manager.id
        assert body["company"]["id"] == company["id"]
        assert body["company"]["tax_id"] == company["tax_id"]
        assert [u["id"] for u in body["staff"]] == [cook.id]
        assert "password" not in body["creator"]
        assert all("password" not in u for u in body["staff"])

    def test_listings_include_related_records(self, client, manager, company, restaurant):
        for url in (
            "/api/restaurants",
            "/api/restaurants/my-restaurants",
            f"/api/restaurants/company/{company['id']}",
        ):
            [listed] = client.get(url, headers=manager.headers).json()
            assert listed["creator"]["id"] == manager.id
            assert listed["company"]["name"] == "Acme"
            assert listed["staff"] == []

    def test_requires_authentication(self, client, restaurant):
        assert client.get("/api/restaurants").status_code == 401


class TestMutateRestaurant:
    def test_creator_keeps_authority_after_losing_management(
        self, client, register_user, db_session, manager, company, restaurant
    ):
        new_manager = register_user()
        _set_manager(db_session, company["id"], new_manager.id)

        response = client.patch(
            f"/api/restaurants/{restaurant['id']}", json={"place": "Second Ave"}, headers=manager.headers
        )
        assert response.status_code == 200
        assert response.json()["place"] == "Second Ave"

    def test_manager_overrides_any_creator(
        self, client, register_user, db_session, company, restaurant
    ):
        new_manager = register_user()
        _set_manager(db_session, company["id"], new_manager.id)

        response = client.patch(
            f"/api/restaurants/{restaurant['id']}", json={"name": "Uptown"}, headers=new_manager.headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Uptown"
        assert response.json()["creator_id"] != new_manager.id

        assert client.delete(
            f"/api/restaurants/{restaurant['id']}", headers=new_manager.headers
        ).status_code == 204

    def test_third_party_denied(self, client, register_user, db_session, restaurant):
        stranger = register_user()
        patch = client.patch(
            f"/api/restaurants/{restaurant['id']}", json={"name": "Mine"}, headers=stranger.headers
        )
        assert patch.status_code == 403

        delete = client.delete(f"/api/restaurants/{restaurant['id']}", headers=stranger.headers)
        assert delete.status_code == 403
        assert db_session.query(Restaurant).count() == 1

    def test_missing_restaurant_is_404_for_anyone(self, client, register_user):
        stranger = register_user()
        missing = uuid.uuid4()
        assert client.patch(
            f"/api/restaurants/{missing}", json={"name": "X"}, headers=stranger.headers
        ).status_code == 404
        assert client.delete(f"/api/restaurants/{missing}", headers=stranger.headers).status_code == 404

    def test_company_id_is_not_patchable(self, client, manager, restaurant):
        response = client.patch(
            f"/api/restaurants/{restaurant['id']}",
            json={"company_id": str(uuid.uuid4())},
            headers=manager.headers,
        )
        assert response.status_code == 400

    def test_delete_clears_staff_affiliation(self, client, register_user, db_session, manager, restaurant):
        cook = register_user(name="Cook")
        staff = db_session.get(User, uuid.UUID(cook.id))
        staff.restaurant_id = uuid.UUID(restaurant["id"])
        db_session.commit()

        response = client.delete(f"/api/restaurants/{restaurant['id']}", headers=manager.headers)
        assert response.status_code == 204

        db_session.expire_all()
        assert db_session.get(User, uuid.UUID(cook.id)).restaurant_id is None
        assert db_session.query(Restaurant).count() == 0


class TestAcmeScenario:
    def test_permission_follows_current_management(self, client, register_user, db_session):
        m = register_user(name="M")
        u = register_user(name="U")

        acme = client.post(
            "/api/companies", json={"name": "Acme", "tax_id": "12345678000123"}, headers=m.headers
        )
        assert acme.status_code == 201
        assert acme.json()["manager_id"] == m.id

        downtown = client.post(
            "/api/restaurants",
            json={"name": "Downtown", "place": "Main St", "company_id": acme.json()["id"]},
            headers=m.headers,
        )
        assert downtown.status_code == 201
        assert downtown.json()["creator_id"] == m.id

        url = f"/api/restaurants/{downtown.json()['id']}"
        assert client.patch(url, json={"name": "Downtown II"}, headers=u.headers).status_code == 403

        _set_manager(db_session, acme.json()["id"], u.id)

        retry = client.patch(url, json={"name": "Downtown II"}, headers=u.headers)
        assert retry.status_code == 200
        assert retry.json()["name"] == "Downtown II"
