"""Tests for registration, login and profile lookup."""

import pytest

from app.errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from app.services import user_service

pytestmark = pytest.mark.asyncio


class TestRegister:

    async def test_register_stores_hash_not_password(self, db):
        user = await user_service.register(db, email="a@b.co", password="pw123456", name="A")

        assert user.id is not None
        assert user.password != "pw123456"
        assert user.password.startswith("$2")
        assert user.verify_password("pw123456")

    async def test_register_defaults(self, db):
        user = await user_service.register(db, email="a@b.co", password="pw", name="A")

        assert user.is_employer is False
        assert user.phone == ""
        assert user.company == ""
        assert user.created_at is not None

    @pytest.mark.parametrize("missing", ["email", "password", "name"])
    async def test_register_requires_fields(self, db, missing):
        fields = {"email": "a@b.co", "password": "pw", "name": "A"}
        fields[missing] = ""

        with pytest.raises(ValidationError) as exc:
            await user_service.register(db, **fields)
        assert exc.value.message == "Email, password and name are required"

    async def test_duplicate_email_rejected_regardless_of_other_fields(self, db, seeker):
        with pytest.raises(DuplicateEmail):
            await user_service.register(
                db, email=seeker.email, password="different", name="Someone Else", is_employer=True
            )

    async def test_email_is_case_sensitive(self, db, seeker):
        user = await user_service.register(
            db, email=seeker.email.upper(), password="pw", name="Upper"
        )
        assert user.id != seeker.id

    async def test_to_dict_never_contains_password(self, db, employer):
        data = employer.to_dict()

        assert "password" not in data
        assert data["isEmployer"] is True
        assert data["company"] == "ACME Lda"


class TestLogin:

    async def test_login_success(self, db, seeker, password):
        user = await user_service.login(db, seeker.email, password)
        assert user.id == seeker.id

    async def test_unknown_email_and_wrong_password_fail_identically(self, db, seeker, password):
        with pytest.raises(InvalidCredentials) as unknown:
            await user_service.login(db, "nobody@x.co", password)
        with pytest.raises(InvalidCredentials) as wrong:
            await user_service.login(db, seeker.email, "wrong-password")

        assert unknown.value.message == wrong.value.message

    async def test_login_requires_fields(self, db):
        with pytest.raises(ValidationError):
            await user_service.login(db, "", "pw")


class TestGetUser:

    async def test_get_user(self, db, seeker):
        user = await user_service.get_user(db, seeker.id)
        assert user.email == seeker.email

    async def test_get_missing_user(self, db):
        with pytest.raises(NotFound):
            await user_service.get_user(db, 9999)


class TestLongPasswords:

    async def test_passphrase_longer_than_bcrypt_limit(self, db):
        passphrase = "correct horse battery staple " * 4

        user = await user_service.register(db, email="long@pw.co", password=passphrase, name="Long")

        assert len(passphrase.encode("utf-8")) > 72
        logged_in = await user_service.login(db, "long@pw.co", passphrase)
        assert logged_in.id == user.id

    async def test_only_first_72_bytes_are_compared(self, db):
        base = "x" * 72
        await user_service.register(db, email="cut@pw.co", password=base + "tail", name="Cut")

        user = await user_service.login(db, "cut@pw.co", base + "other-tail")
        assert user.email == "cut@pw.co"

        with pytest.raises(InvalidCredentials):
            await user_service.login(db, "cut@pw.co", "y" + base[1:] + "tail")
