"""Unit tests for app.services.roles: lazy role creation and idempotent assignment."""

import unittest

from app.models import Role
from app.services.accounts import create_user
from app.services.roles import assign_role, ensure_role_exists, primary_role, roles_of
from tests.helpers import make_engine, make_session_factory


class RoleStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = make_engine()
        self.db = make_session_factory(self.engine)()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class TestEnsureRoleExists(RoleStoreTestCase):
    """ensure_role_exists creates once, then returns the existing row."""

    def test_creates_missing_role(self) -> None:
        role = ensure_role_exists(self.db, "Admin")
        self.assertIsNotNone(role.id)
        self.assertEqual(self.db.query(Role).count(), 1)

    def test_is_idempotent(self) -> None:
        first = ensure_role_exists(self.db, "User")
        second = ensure_role_exists(self.db, "User")
        self.assertEqual(first.id, second.id)
        self.assertEqual(self.db.query(Role).filter(Role.name == "User").count(), 1)


class TestAssignRole(RoleStoreTestCase):
    """assign_role associates a role once; roles_of and primary_role read it back."""

    def test_assign_and_read(self) -> None:
        user = create_user(self.db, "carol", "hash")
        assign_role(self.db, user, "User")
        self.assertEqual(roles_of(user), {"User"})
        self.assertEqual(primary_role(user), "User")

    def test_assign_twice_keeps_one_association(self) -> None:
        user = create_user(self.db, "carol", "hash")
        assign_role(self.db, user, "User")
        assign_role(self.db, user, "User")
        self.db.commit()
        self.db.refresh(user)
        self.assertEqual(len(user.roles), 1)

    def test_primary_role_is_first_created(self) -> None:
        user = create_user(self.db, "dave", "hash")
        assign_role(self.db, user, "Admin")
        assign_role(self.db, user, "User")
        self.db.commit()
        self.db.refresh(user)
        self.assertEqual(roles_of(user), {"Admin", "User"})
        self.assertEqual(primary_role(user), "Admin")

    def test_primary_role_empty_without_roles(self) -> None:
        user = create_user(self.db, "erin", "hash")
        self.assertEqual(roles_of(user), set())
        self.assertEqual(primary_role(user), "")


if __name__ == "__main__":
    unittest.main()
