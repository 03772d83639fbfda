from bson import ObjectId

from conftest import seed_account
from servicehub.services.accounts import Role, account_summary, find_by_email, find_by_id


class TestFindByEmail:
    async def test_not_found_is_none(self, db):
        assert await find_by_email(db, "nobody@example.com") is None

    async def test_role_comes_from_collection(self, db):
        await seed_account(db, Role.PROVIDER, "pat@example.com", role="admin")

        located = await find_by_email(db, "pat@example.com")

        assert located.role == Role.PROVIDER
        assert located.document["role"] == "admin"

    async def test_client_wins_over_provider_and_admin(self, db):
        await seed_account(db, Role.ADMIN, "dup@example.com")
        await seed_account(db, Role.PROVIDER, "dup@example.com")
        client = await seed_account(db, Role.CLIENT, "dup@example.com")

        located = await find_by_email(db, "dup@example.com")

        assert located.role == Role.CLIENT
        assert located.id == client.id

    async def test_provider_wins_over_admin(self, db):
        await seed_account(db, Role.ADMIN, "dup@example.com")
        provider = await seed_account(db, Role.PROVIDER, "dup@example.com")

        located = await find_by_email(db, "dup@example.com")

        assert located.role == Role.PROVIDER
        assert located.id == provider.id

    async def test_email_match_is_case_sensitive(self, db):
        await seed_account(db, Role.CLIENT, "Ann@example.com")

        assert await find_by_email(db, "ann@example.com") is None

    async def test_restricted_roles(self, db):
        await seed_account(db, Role.CLIENT, "dup@example.com")
        admin = await seed_account(db, Role.ADMIN, "dup@example.com")

        located = await find_by_email(db, "dup@example.com", roles=(Role.ADMIN,))

        assert located.id == admin.id


class TestFindById:
    async def test_found(self, db):
        seeded = await seed_account(db, Role.ADMIN, "root@example.com")

        located = await find_by_id(db, Role.ADMIN, str(seeded.id))

        assert located.role == Role.ADMIN
        assert located.email == "root@example.com"

    async def test_wrong_collection(self, db):
        seeded = await seed_account(db, Role.ADMIN, "root@example.com")

        assert await find_by_id(db, Role.CLIENT, str(seeded.id)) is None

    async def test_malformed_id(self, db):
        assert await find_by_id(db, Role.CLIENT, "not-an-object-id") is None
        assert await find_by_id(db, Role.CLIENT, None) is None
        assert await find_by_id(db, Role.CLIENT, str(ObjectId())) is None


class TestAccountSummary:
    async def test_excludes_credentials(self, db):
        seeded = await seed_account(
            db, Role.CLIENT, "ann@example.com", fullName="Ann Lee", phoneNumber="555-0100",
            resetPasswordToken="abc", resetPasswordExpire=1,
        )

        summary = account_summary(seeded)

        assert summary == {
            "id": str(seeded.id),
            "email": "ann@example.com",
            "fullName": "Ann Lee",
            "role": "client",
            "phoneNumber": "555-0100",
        }

    async def test_provider_name_from_parts(self, db):
        seeded = await seed_account(db, Role.PROVIDER, "pat@example.com", fullName="", firstName="Pat", lastName="Doe", phone="555")

        summary = account_summary(seeded)

        assert summary["fullName"] == "Pat Doe"
        assert summary["phoneNumber"] == "555"
