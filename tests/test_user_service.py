import json
from support import GOOD_PASSWORD, ServiceTestCase
from tunelist.core.errors import AuthError, ConflictError, NotFoundError, ValidationError


class TestRegistration(ServiceTestCase):

    def test_register_creates_user_and_empty_collection(self):
        user = self.make_user()
        self.assertTrue(user.id.startswith("user_"))
        self.assertEqual(user.first_name, "Alice")
        self.assertEqual(self.playlist_service.get_user_playlists(user.id), [])

    def test_password_is_stored_hashed(self):
        self.make_user()
        raw = (self.data_dir / "users.json").read_text(encoding="utf-8")
        self.assertNotIn(GOOD_PASSWORD, raw)
        record = json.loads(raw)[0]
        self.assertNotIn("password", record)
        self.assertIn("passwordHash", record)

    def test_username_conflict_is_case_insensitive(self):
        self.make_user("alice")
        with self.assertRaises(ConflictError):
            self.make_user("ALICE")

    def test_missing_fields_rejected(self):
        for username, password, first_name in [
            ("", GOOD_PASSWORD, "Alice"),
            ("alice", "", "Alice"),
            ("alice", GOOD_PASSWORD, "   "),
            (None, GOOD_PASSWORD, "Alice"),
        ]:
            with self.assertRaises(ValidationError) as ctx:
                self.user_service.create_user(username, password, first_name)
            self.assertEqual(ctx.exception.message, "Username, password, and first name are required")

    def test_password_rules(self):
        cases = {
            "a1!": "Password must be at least 6 characters",
            "123456!": "Password must contain at least one letter",
            "abcdef!": "Password must contain at least one number",
            "abc123": "Password must contain at least one special character",
        }
        for password, message in cases.items():
            with self.assertRaises(ValidationError) as ctx:
                self.user_service.create_user("bob", password, "Bob")
            self.assertEqual(ctx.exception.message, message)
        self.assertFalse(self.user_service.username_exists("bob"))

    def test_username_is_stored_as_typed(self):
        user = self.user_service.create_user(" bob ", GOOD_PASSWORD, "Bob")
        self.assertEqual(user.username, " bob ")
        self.assertEqual(self.user_service.authenticate_user(" bob ", GOOD_PASSWORD).id, user.id)
        self.assertTrue(self.user_service.username_exists(" BOB "))

    def test_blank_username_rejected(self):
        with self.assertRaises(ValidationError):
            self.user_service.create_user("   ", GOOD_PASSWORD, "Bob")

    def test_password_meeting_all_rules_accepted(self):
        user = self.user_service.create_user("bob", "abc12!", "Bob")
        self.assertEqual(user.username, "bob")


class TestAuthentication(ServiceTestCase):

    def setUp(self):
        super().setUp()
        self.user = self.make_user()

    def test_login_ignores_username_case(self):
        user = self.user_service.authenticate_user("Alice", GOOD_PASSWORD)
        self.assertEqual(user.id, self.user.id)

    def test_wrong_password_and_unknown_user_look_the_same(self):
        with self.assertRaises(AuthError) as wrong_password:
            self.user_service.authenticate_user("alice", "Wrong!pass1")
        with self.assertRaises(AuthError) as unknown_user:
            self.user_service.authenticate_user("mallory", GOOD_PASSWORD)
        self.assertEqual(wrong_password.exception.message, unknown_user.exception.message)

    def test_password_is_case_sensitive(self):
        with self.assertRaises(AuthError):
            self.user_service.authenticate_user("alice", GOOD_PASSWORD.upper())

    def test_missing_credentials(self):
        with self.assertRaises(ValidationError):
            self.user_service.authenticate_user("alice", "")

    def test_username_exists(self):
        self.assertTrue(self.user_service.username_exists("ALICE"))
        self.assertFalse(self.user_service.username_exists("bob"))

    def test_get_user(self):
        self.assertEqual(self.user_service.get_user(self.user.id).username, "alice")
        with self.assertRaises(NotFoundError):
            self.user_service.get_user("user_missing")

    def test_public_view_has_no_password_data(self):
        public = self.user.to_public()
        self.assertEqual(set(public), {"id", "username", "firstName", "imageUrl", "createdAt"})
