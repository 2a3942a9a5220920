"""Tests for app.services.users.UserController against an in-memory user store."""

import unittest
from unittest.mock import patch

from app.models import User
from app.services.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.services.tokens import InvalidTokenError
from app.services.users import (
    INVALID_CREDENTIALS,
    INVALID_ROLE,
    LOGOUT_OK,
    SIGNUP_OK,
    USER_DOES_NOT_EXIST,
    USER_EXISTS,
    USER_NOT_FOUND,
)

from support import make_controller, make_session_factory, signup_payload


class ControllerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session = make_session_factory()()
        self.controller = make_controller(self.session)

    def tearDown(self) -> None:
        self.session.close()

    def _create(self, **overrides: object) -> User:
        payload = signup_payload(**overrides)
        self.controller.signup(payload)
        return self.controller.users.get_by_email(payload["email"])


class TestSignup(ControllerTestCase):
    def test_signup_then_login(self) -> None:
        self.assertEqual(self.controller.signup(signup_payload()), SIGNUP_OK)
        token = self.controller.login({"email": "a@x.com", "password": "Secret1"})
        claims = self.controller.tokens.verify(token)
        self.assertEqual(claims["role"], "admin")

    def test_signup_stores_hash_and_active_flag(self) -> None:
        user = self._create()
        self.assertNotEqual(user.password_hash, "Secret1")
        self.assertFalse(user.deleted)
        self.assertEqual(user.role.title, "admin")

    def test_duplicate_email_rejected_regardless_of_other_fields(self) -> None:
        self._create()
        with self.assertRaises(ConflictError) as ctx:
            self.controller.signup(
                signup_payload(firstname="Bob", username="bob", password="Other99", role="user")
            )
        self.assertEqual(ctx.exception.message, USER_EXISTS)
        self.assertEqual(ctx.exception.status_code, 400)

    def test_duplicate_email_of_deleted_user_rejected(self) -> None:
        user = self._create()
        self.controller.delete(user.id)
        with self.assertRaises(ConflictError):
            self.controller.signup(signup_payload())

    def test_unknown_role_rejected(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.controller.signup(signup_payload(role="superuser"))
        self.assertEqual(ctx.exception.message, INVALID_ROLE)
        self.assertIsNone(self.controller.users.get_by_email("a@x.com"))

    def test_invalid_payload_has_no_side_effect(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.controller.signup(signup_payload(email="nope"))
        self.assertEqual(ctx.exception.message, '"email" must be a valid email')
        self.assertEqual(self.controller.get_all(), [])

    def test_concurrent_duplicate_caught_by_unique_index(self) -> None:
        """The pre-check can miss a concurrent insert; the storage constraint still rejects it."""
        self._create()
        with patch.object(self.controller.users, "get_by_email", return_value=None):
            with self.assertRaises(ConflictError) as ctx:
                self.controller.signup(signup_payload(username="alice2"))
        self.assertEqual(ctx.exception.message, USER_EXISTS)
        self.assertEqual(len(self.controller.get_all()), 1)


class TestLogin(ControllerTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self._create()

    def test_wrong_password_and_unknown_email_share_message(self) -> None:
        with self.assertRaises(AuthenticationError) as wrong_password:
            self.controller.login({"email": "a@x.com", "password": "Wrong99"})
        with self.assertRaises(AuthenticationError) as unknown_email:
            self.controller.login({"email": "nobody@x.com", "password": "Secret1"})
        self.assertEqual(wrong_password.exception.message, INVALID_CREDENTIALS)
        self.assertEqual(unknown_email.exception.message, wrong_password.exception.message)
        self.assertEqual(unknown_email.exception.status_code, 400)

    def test_deleted_user_cannot_login(self) -> None:
        self.controller.delete(self.user.id)
        with self.assertRaises(AuthenticationError) as ctx:
            self.controller.login({"email": "a@x.com", "password": "Secret1"})
        self.assertEqual(ctx.exception.message, INVALID_CREDENTIALS)

    def test_login_validation(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.controller.login({"email": "a@x.com"})
        self.assertEqual(ctx.exception.message, '"password" is required')


class TestLogout(ControllerTestCase):
    def test_logout_revokes_token(self) -> None:
        self._create()
        token = self.controller.login({"email": "a@x.com", "password": "Secret1"})
        self.assertEqual(self.controller.logout(token), LOGOUT_OK)
        with self.assertRaises(InvalidTokenError):
            self.controller.tokens.verify(token)

    def test_logout_without_token(self) -> None:
        self.assertEqual(self.controller.logout(None), LOGOUT_OK)

    def test_logout_with_garbage_token(self) -> None:
        self.assertEqual(self.controller.logout("not-a-token"), LOGOUT_OK)

    def test_logout_twice(self) -> None:
        self._create()
        token = self.controller.login({"email": "a@x.com", "password": "Secret1"})
        self.controller.logout(token)
        self.assertEqual(self.controller.logout(token), LOGOUT_OK)


class TestGetAll(ControllerTestCase):
    def test_sorted_by_firstname(self) -> None:
        self._create(firstname="Carol", email="c@x.com")
        self._create(firstname="Alice", email="a@x.com")
        self._create(firstname="Bob", email="b@x.com")
        names = [u.firstname for u in self.controller.get_all()]
        self.assertEqual(names, ["Alice", "Bob", "Carol"])

    def test_includes_soft_deleted_users(self) -> None:
        """The listing does not filter on the deleted flag."""
        user = self._create()
        self.controller.delete(user.id)
        listed = self.controller.get_all()
        self.assertEqual([u.id for u in listed], [user.id])
        self.assertTrue(listed[0].deleted)


class TestGetById(ControllerTestCase):
    def test_returns_user(self) -> None:
        user = self._create()
        self.assertEqual(self.controller.get_by_id(user.id).email, "a@x.com")

    def test_missing_is_404(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.get_by_id(999)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, USER_NOT_FOUND)

    def test_soft_deleted_is_404(self) -> None:
        user = self._create()
        self.controller.delete(user.id)
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.get_by_id(user.id)
        self.assertEqual(ctx.exception.status_code, 404)


class TestUpdate(ControllerTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self._create()

    def test_update_names(self) -> None:
        updated = self.controller.update(self.user.id, {"firstname": "Alicia", "lastname": "Jones"})
        self.assertEqual(updated.firstname, "Alicia")
        self.assertEqual(updated.lastname, "Jones")

    def test_omitted_password_keeps_hash(self) -> None:
        old_hash = self.user.password_hash
        updated = self.controller.update(self.user.id, {"firstname": "Alicia"})
        self.assertEqual(updated.password_hash, old_hash)
        self.controller.login({"email": "a@x.com", "password": "Secret1"})

    def test_new_password_rehashed(self) -> None:
        old_hash = self.user.password_hash
        updated = self.controller.update(self.user.id, {"password": "NewPass9"})
        self.assertNotEqual(updated.password_hash, old_hash)
        self.controller.login({"email": "a@x.com", "password": "NewPass9"})
        with self.assertRaises(AuthenticationError):
            self.controller.login({"email": "a@x.com", "password": "Secret1"})

    def test_empty_strings_keep_existing_values(self) -> None:
        old_hash = self.user.password_hash
        updated = self.controller.update(
            self.user.id, {"firstname": "", "lastname": "", "password": ""}
        )
        self.assertEqual(updated.firstname, "Alice")
        self.assertEqual(updated.lastname, "Smith")
        self.assertEqual(updated.password_hash, old_hash)

    def test_missing_user(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.update(999, {"firstname": "Alicia"})
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, USER_DOES_NOT_EXIST)

    def test_deleted_user_not_mutated(self) -> None:
        self.controller.delete(self.user.id)
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.update(self.user.id, {"firstname": "Alicia"})
        self.assertEqual(ctx.exception.status_code, 400)
        self.session.expire_all()
        self.assertEqual(self.controller.users.get_by_id(self.user.id).firstname, "Alice")

    def test_invalid_payload_not_mutated(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.update(self.user.id, {"firstname": "Alicia", "lastname": "J"})
        self.session.expire_all()
        self.assertEqual(self.controller.users.get_by_id(self.user.id).firstname, "Alice")


class TestDelete(ControllerTestCase):
    def test_soft_delete_keeps_row(self) -> None:
        user = self._create()
        deleted = self.controller.delete(user.id)
        self.assertTrue(deleted.deleted)
        self.assertIsNotNone(self.controller.users.get_by_id(user.id))

    def test_delete_twice_rejected(self) -> None:
        user = self._create()
        self.controller.delete(user.id)
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.delete(user.id)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, USER_DOES_NOT_EXIST)

    def test_delete_missing(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.delete(12345)
        self.assertEqual(ctx.exception.status_code, 400)


if __name__ == "__main__":
    unittest.main()
