"""Integration tests for CVRepository: owner scoping and atomic partial updates."""

from app.repositories.cvs import CVRepository
from app.repositories.users import UserRepository
from helpers import RepositoryTestCase, cv_payload


class TestCVOwnership(RepositoryTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")
        self.bob = self.make_user("bob")
        self.cvs = CVRepository(self.db)
        self.cv = self.cvs.create(self.alice.id, cv_payload())

    def test_owner_can_read(self) -> None:
        self.assertEqual(self.cvs.get_for_owner(self.cv.id, self.alice.id).id, self.cv.id)

    def test_other_user_sees_nothing(self) -> None:
        self.assertIsNone(self.cvs.get_for_owner(self.cv.id, self.bob.id))
        self.assertEqual(self.cvs.list_for_owner(self.bob.id), [])

    def test_other_user_cannot_update(self) -> None:
        builder = self.cvs.new_builder().set_if_present("Hacker", "job_title")
        self.assertIsNone(self.cvs.update_for_owner(self.cv.id, self.bob.id, builder))
        self.db.expire_all()
        self.assertEqual(self.cvs.get_for_owner(self.cv.id, self.alice.id).job_title, "Engineer")

    def test_other_user_cannot_delete(self) -> None:
        cv_id, alice_id, bob_id = self.cv.id, self.alice.id, self.bob.id
        self.assertEqual(self.cvs.delete_for_owner(cv_id, bob_id), 0)
        self.assertEqual(self.cvs.delete_for_owner(cv_id, alice_id), 1)
        self.assertIsNone(self.cvs.get_for_owner(cv_id, alice_id))
        self.assertIsNone(self.cvs.get(cv_id))


class TestCVCreate(RepositoryTestCase):
    def test_nested_items_stored_as_json_documents(self) -> None:
        user = self.make_user("alice")
        cv = CVRepository(self.db).create(user.id, cv_payload())
        self.assertEqual(cv.owner_id, user.id)
        self.assertEqual(cv.work_experiences[0]["company"], "Babbage & Co")
        self.assertEqual(cv.work_experiences[0]["start_date"], "1842-01-01")
        self.assertIsNone(cv.work_experiences[0]["end_date"])

    def test_list_is_most_recently_updated_first(self) -> None:
        user = self.make_user("alice")
        cvs = CVRepository(self.db)
        first = cvs.create(user.id, cv_payload(job_title="First"))
        second = cvs.create(user.id, cv_payload(job_title="Second"))
        cvs.update_for_owner(first.id, user.id, cvs.new_builder().set("Bumped", "summary"))
        self.assertEqual([cv.id for cv in cvs.list_for_owner(user.id)], [first.id, second.id])


class TestCVPartialUpdate(RepositoryTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self.make_user("alice")
        self.cvs = CVRepository(self.db)
        self.cv = self.cvs.create(self.user.id, cv_payload())
        self.created_at = self.cv.created_at
        self.updated_at = self.cv.updated_at

    def test_only_provided_field_and_timestamp_change(self) -> None:
        builder = (
            self.cvs.new_builder()
            .set_if_present(None, "job_title")
            .set_if_present("New summary", "summary")
        )
        updated = self.cvs.update_for_owner(self.cv.id, self.user.id, builder)
        self.assertEqual(updated.job_title, "Engineer")
        self.assertEqual(updated.summary, "New summary")
        self.assertEqual(updated.skills, ["Go"])
        self.assertEqual(updated.created_at, self.created_at)
        self.assertGreaterEqual(updated.updated_at, self.updated_at)

    def test_present_empty_list_clears(self) -> None:
        builder = self.cvs.new_builder().replace_list_if_present([], "skills")
        updated = self.cvs.update_for_owner(self.cv.id, self.user.id, builder)
        self.assertEqual(updated.skills, [])

    def test_absent_list_is_kept(self) -> None:
        builder = self.cvs.new_builder().replace_list_if_present(None, "skills").set("x", "summary")
        updated = self.cvs.update_for_owner(self.cv.id, self.user.id, builder)
        self.assertEqual(updated.skills, ["Go"])

    def test_disjoint_updates_from_separate_sessions_both_land(self) -> None:
        other_db = self.SessionLocal()
        try:
            other = CVRepository(other_db)
            # Both sessions loaded the pre-image before either writes.
            self.assertEqual(other.get_for_owner(self.cv.id, self.user.id).job_title, "Engineer")

            self.cvs.update_for_owner(
                self.cv.id, self.user.id, self.cvs.new_builder().set("Staff Engineer", "job_title")
            )
            result = other.update_for_owner(
                self.cv.id, self.user.id, other.new_builder().replace_list_if_present(["Go", "Rust"], "skills")
            )
        finally:
            other_db.close()

        self.assertEqual(result.job_title, "Staff Engineer")
        self.assertEqual(result.skills, ["Go", "Rust"])
        self.db.expire_all()
        stored = self.cvs.get_for_owner(self.cv.id, self.user.id)
        self.assertEqual(stored.job_title, "Staff Engineer")
        self.assertEqual(stored.skills, ["Go", "Rust"])

    def test_update_after_owner_deleted_returns_none(self) -> None:
        cv_id, user_id = self.cv.id, self.user.id
        UserRepository(self.db).delete_with_cvs(user_id)
        builder = self.cvs.new_builder().set("x", "summary")
        self.assertIsNone(self.cvs.update_for_owner(cv_id, user_id, builder))

    def test_returned_post_image_is_not_overwritten_by_a_later_writer(self) -> None:
        cv_id, user_id = self.cv.id, self.user.id
        mine = self.cvs.update_for_owner(cv_id, user_id, self.cvs.new_builder().set("A-summary", "summary"))

        other_db = self.SessionLocal()
        try:
            other = CVRepository(other_db)
            other.update_for_owner(cv_id, user_id, other.new_builder().set("B-summary", "summary"))
        finally:
            other_db.close()

        self.assertEqual(mine.summary, "A-summary")
        self.db.expire_all()
        self.assertEqual(self.cvs.get_for_owner(cv_id, user_id).summary, "B-summary")

    def test_post_image_survives_row_deletion_and_session_close(self) -> None:
        cv_id, user_id = self.cv.id, self.user.id
        updated = self.cvs.update_for_owner(cv_id, user_id, self.cvs.new_builder().set("Kept", "summary"))

        other_db = self.SessionLocal()
        try:
            self.assertEqual(CVRepository(other_db).delete_for_owner(cv_id, user_id), 1)
        finally:
            other_db.close()
        self.db.close()

        self.assertEqual(updated.id, cv_id)
        self.assertEqual(updated.summary, "Kept")
        self.assertEqual(updated.job_title, "Engineer")


class TestInsertReadBack(RepositoryTestCase):
    def test_created_entity_is_usable_after_session_close(self) -> None:
        user = self.make_user("alice")
        cv = CVRepository(self.db).create(user.id, cv_payload())
        self.db.close()
        self.assertIsNotNone(cv.id)
        self.assertEqual(cv.owner_id, user.id)
        self.assertEqual(cv.skills, ["Go"])
        self.assertEqual(user.roles, ["User"])
