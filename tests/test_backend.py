from unittest import TestCase

from pynvr import (
    NvrConnectionError,
    NvrNoCredentialError,
    NvrSessionExpiredError,
)
from tests.fakes import CONNECTION_REFUSED, envelope, make_nvr


class Navigator:

    def __init__(self):
        self.paths = []

    def __call__(self, path):
        self.paths.append(path)


class TestBackEndRequests(TestCase):

    def setUp(self):
        self.navigate = Navigator()
        self.nvr, self.conn = make_nvr(navigate=self.navigate)
        self.be = self.nvr.core.be

    def tearDown(self):
        self.nvr.stop()

    def test_envelope(self):
        self.conn.route("GET", "/api/cameras", envelope([{"id": 1}]))
        response = self.be.get("/api/cameras")
        self.assertTrue(response.success)
        self.assertEqual(response.data, [{"id": 1}])
        self.assertIsNone(response.error)

    def test_bearer_header(self):
        self.conn.route("GET", "/api/cameras", envelope([]))
        self.be.get("/api/cameras")
        _method, _path, _json, headers = self.conn.calls[-1]
        self.assertEqual(headers["Authorization"], "Bearer test-token")

    def test_application_failure_passes_through(self):
        self.conn.route("PUT", "/api/cameras/3", envelope(None, False, "name taken"))
        response = self.be.put("/api/cameras/3", {"name": "x"})
        self.assertFalse(response.success)
        self.assertEqual(response.error, "name taken")
        self.assertTrue(self.nvr.is_authenticated)
        self.assertEqual(self.navigate.paths, [])

    def test_non_2xx_envelope_is_not_special(self):
        self.conn.route("POST", "/api/users", (400, envelope(None, False, "bad email")))
        response = self.be.post("/api/users", {"email": "nope"})
        self.assertFalse(response.success)
        self.assertEqual(response.error, "bad email")
        self.assertTrue(self.nvr.is_authenticated)

    def test_malformed_body(self):
        self.conn.route("GET", "/api/cameras", [1, 2, 3])
        response = self.be.get("/api/cameras")
        self.assertFalse(response.success)
        self.assertEqual(response.error, "malformed response")

    def test_unauthorized(self):
        self.conn.route("GET", "/api/cameras", (401, envelope(None, False, "expired")))
        with self.assertRaises(NvrSessionExpiredError):
            self.be.get("/api/cameras")
        self.assertFalse(self.nvr.is_authenticated)
        self.assertEqual(self.navigate.paths, ["/login"])
        self.assertEqual(self.conn.calls_to("GET", "/api/cameras"), 1)

    def test_no_credential(self):
        self.nvr.core.be.session.clear()
        with self.assertRaises(NvrNoCredentialError):
            self.be.get("/api/cameras")
        self.assertEqual(self.conn.calls, [])
        self.assertEqual(self.navigate.paths, ["/login"])

    def test_connection_error(self):
        self.conn.fail_with = CONNECTION_REFUSED
        with self.assertRaises(NvrConnectionError):
            self.be.get("/api/cameras")
        self.assertTrue(self.nvr.is_authenticated)
        self.assertEqual(self.navigate.paths, [])

    def test_not_json_error_status(self):
        self.conn.not_json("GET", "/api/cameras", status=502)
        response = self.be.get("/api/cameras")
        self.assertFalse(response.success)
        self.assertIsNone(response.data)
        self.assertEqual(response.error, "HTTP 502")
        self.assertTrue(self.nvr.is_authenticated)

    def test_not_json_ok_status(self):
        self.conn.not_json("GET", "/api/cameras")
        with self.assertRaises(NvrConnectionError):
            self.be.get("/api/cameras")
        self.assertTrue(self.nvr.is_authenticated)

    def test_logout_callbacks(self):
        called = []
        self.be.add_logout_callback(lambda: called.append(1))
        self.conn.route("GET", "/api/cameras", (401, envelope(None, False, "expired")))
        with self.assertRaises(NvrSessionExpiredError):
            self.be.get("/api/cameras")
        self.assertEqual(called, [1])

    def test_broken_navigate(self):
        def broken(_path):
            raise RuntimeError("no router")

        nvr, conn = make_nvr(navigate=broken)
        try:
            conn.route("GET", "/api/cameras", (401, envelope(None, False, "expired")))
            with self.assertRaises(NvrSessionExpiredError):
                nvr.core.be.get("/api/cameras")
            self.assertFalse(nvr.is_authenticated)
        finally:
            nvr.stop()


class TestBackEndLogin(TestCase):

    def setUp(self):
        self.navigate = Navigator()

    def _make(self, **kwargs):
        self.nvr, self.conn = make_nvr(token=None, navigate=self.navigate, **kwargs)
        self.addCleanup(self.nvr.stop)

    def test_bearer_login(self):
        self._make()
        self.assertFalse(self.nvr.is_authenticated)
        self.conn.route("POST", "/auth/login", {"success": True, "token": "fresh"})
        self.assertIsNone(self.nvr.login("admin", "secret"))
        self.assertTrue(self.nvr.is_authenticated)

        _method, _path, body, _headers = self.conn.calls[-1]
        self.assertEqual(body, {"username": "admin", "password": "secret"})

        self.conn.route("GET", "/api/cameras", envelope([]))
        self.nvr.core.be.get("/api/cameras")
        self.assertEqual(self.conn.calls[-1][3]["Authorization"], "Bearer fresh")

    def test_cookie_login(self):
        self._make(auth_scheme="cookie")

        def answer(_json):
            self.conn.set_cookie("session", "cookie-value")
            return {"success": True}

        self.conn.route("POST", "/auth/login", answer)
        self.assertIsNone(self.nvr.login("admin", "secret"))
        self.assertTrue(self.nvr.is_authenticated)
        self.assertEqual(self.nvr.core.be.session.credential, "cookie-value")

        self.conn.route("GET", "/api/cameras", envelope([]))
        self.nvr.core.be.get("/api/cameras")
        self.assertNotIn("Authorization", self.conn.calls[-1][3])

    def test_cookie_scheme_honours_token(self):
        self.nvr, self.conn = make_nvr(token="legacy", navigate=self.navigate, auth_scheme="cookie")
        self.addCleanup(self.nvr.stop)
        self.assertTrue(self.nvr.is_authenticated)
        self.conn.route("GET", "/api/cameras", envelope([]))
        self.nvr.core.be.get("/api/cameras")
        self.assertEqual(self.conn.calls[-1][3]["Authorization"], "Bearer legacy")

    def test_login_refused(self):
        self._make()
        self.conn.route("POST", "/auth/login", (401, {"success": False, "error": "Bad password"}))
        self.assertEqual(self.nvr.login("admin", "wrong"), "Bad password")
        self.assertFalse(self.nvr.is_authenticated)
        self.assertEqual(self.nvr.last_error, "login failed: Bad password")
        self.assertEqual(self.navigate.paths, [])

    def test_login_refused_without_message(self):
        self._make()
        self.conn.route("POST", "/auth/login", (403, None))
        self.assertEqual(self.nvr.login("admin", "wrong"), "Invalid credentials")

    def test_login_without_credential_in_answer(self):
        self._make()
        self.conn.route("POST", "/auth/login", {"success": True})
        self.assertEqual(self.nvr.login("admin", "secret"), "Invalid credentials")
        self.assertFalse(self.nvr.is_authenticated)

    def test_login_connection_error(self):
        self._make()
        self.conn.fail_with = CONNECTION_REFUSED
        self.assertEqual(self.nvr.login("admin", "secret"), "Could not connect to the server")

    def test_login_from_config(self):
        self._make(username="admin", password="secret")
        # the constructor had no route to log in against
        self.assertFalse(self.nvr.is_authenticated)
        self.conn.route("POST", "/auth/login", {"success": True, "token": "from-cfg"})
        self.assertIsNone(self.nvr.login())
        self.assertEqual(self.conn.calls[-1][2], {"username": "admin", "password": "secret"})

    def test_logout(self):
        self._make(auth_scheme="cookie")

        def answer(_json):
            self.conn.set_cookie("session", "cookie-value")
            return {"success": True}

        self.conn.route("POST", "/auth/login", answer)
        self.conn.route("POST", "/auth/logout", {"success": True})
        self.nvr.login("admin", "secret")
        self.nvr.logout()
        self.assertFalse(self.nvr.is_authenticated)
        self.assertEqual(self.conn.calls_to("POST", "/auth/logout"), 1)
        self.assertEqual(self.navigate.paths, ["/login"])

    def test_logout_never_raises(self):
        self.nvr, self.conn = make_nvr(navigate=self.navigate)
        self.addCleanup(self.nvr.stop)
        self.conn.fail_with = CONNECTION_REFUSED
        self.nvr.logout()
        self.assertFalse(self.nvr.is_authenticated)
        self.assertEqual(self.navigate.paths, ["/login"])

    def test_logout_when_anonymous(self):
        self._make()
        self.nvr.logout()
        self.assertEqual(self.conn.calls, [])
        self.assertEqual(self.navigate.paths, ["/login"])
