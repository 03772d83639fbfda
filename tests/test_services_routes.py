from bson import ObjectId

from conftest import bearer, seed_account
from servicehub.services.accounts import Role

SERVICE = {"name": "Drain cleaning", "description": "Kitchen and bath", "category": "plumbing", "price": 80, "duration": 45}


class TestProviderServices:
    async def test_crud(self, client, db):
        provider = await seed_account(db, Role.PROVIDER, "pat@example.com")
        headers = bearer(provider)

        created = await client.post("/api/providers/services", json=SERVICE, headers=headers)
        assert created.status_code == 201
        service = created.json()["service"]
        assert service["provider"] == str(provider.id)
        assert service["active"] is True

        listed = await client.get("/api/providers/services", headers=headers)
        assert listed.status_code == 200
        assert listed.json()["results"] == 1

        updated = await client.put(f"/api/providers/services/{service['id']}", json={"price": 95.5}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["service"]["price"] == 95.5
        assert updated.json()["service"]["name"] == "Drain cleaning"

        fetched = await client.get(f"/api/providers/services/{service['id']}", headers=headers)
        assert fetched.json()["service"]["price"] == 95.5

        deleted = await client.delete(f"/api/providers/services/{service['id']}", headers=headers)
        assert deleted.status_code == 200

        missing = await client.get(f"/api/providers/services/{service['id']}", headers=headers)
        assert missing.status_code == 404

    async def test_other_providers_services_are_hidden(self, client, db):
        owner = await seed_account(db, Role.PROVIDER, "pat@example.com")
        other = await seed_account(db, Role.PROVIDER, "sam@example.com")
        created = await client.post("/api/providers/services", json=SERVICE, headers=bearer(owner))
        service_id = created.json()["service"]["id"]

        fetched = await client.get(f"/api/providers/services/{service_id}", headers=bearer(other))
        deleted = await client.delete(f"/api/providers/services/{service_id}", headers=bearer(other))
        listed = await client.get("/api/providers/services", headers=bearer(other))

        assert fetched.status_code == 404
        assert deleted.status_code == 404
        assert listed.json()["results"] == 0

    async def test_malformed_and_unknown_ids(self, client, db):
        provider = await seed_account(db, Role.PROVIDER, "pat@example.com")

        malformed = await client.get("/api/providers/services/not-an-id", headers=bearer(provider))
        unknown = await client.get(f"/api/providers/services/{ObjectId()}", headers=bearer(provider))

        assert malformed.status_code == 400
        assert unknown.status_code == 404

    async def test_negative_price_rejected(self, client, db):
        provider = await seed_account(db, Role.PROVIDER, "pat@example.com")

        response = await client.post("/api/providers/services", json={**SERVICE, "price": -1}, headers=bearer(provider))

        assert response.status_code == 400

    async def test_clients_are_forbidden(self, client, db):
        account = await seed_account(db, Role.CLIENT, "ann@example.com")

        response = await client.get("/api/providers/services", headers=bearer(account))

        assert response.status_code == 403
