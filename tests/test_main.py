from unittest import TestCase, mock

from click.testing import CliRunner

from pynvr import main
from tests.fakes import CONNECTION_REFUSED, FakeConnection, envelope, make_nvr

CAMERAS = [
    {"id": 1, "name": "front", "enabled": True},
    {"id": 2, "name": "back", "enabled": True},
    {"id": 3, "name": "garage", "enabled": False},
]


class TestMain(TestCase):

    def setUp(self):
        self.conn = FakeConnection()
        self.conn.route("GET", "/api/cameras", envelope(CAMERAS))

        saved = dict(main.opts)
        self.addCleanup(main.opts.update, saved)
        self.addCleanup(self._stop_nvr)

        def factory(**kwargs):
            kwargs["save_state"] = False
            kwargs["auth_scheme"] = "bearer"
            return make_nvr(connection=self.conn, **kwargs)[0]

        patcher = mock.patch("pynvr.main.PyNvr", factory)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _stop_nvr(self):
        if main._nvr is not None:
            main._nvr.stop()
            main._nvr = None

    def _invoke(self, *args):
        result = CliRunner().invoke(main.cli, list(args))
        self.assertEqual(result.exit_code, 0, result.output)
        return result.output

    def test_list_cameras(self):
        output = self._invoke("list", "cameras")
        self.assertEqual(output.splitlines(), [
            "cameras:",
            " front;id=1",
            " back;id=2",
            " garage;id=3",
        ])
        self.assertEqual(self.conn.calls_to("GET", "/api/cameras"), 1)

    def test_list_unreachable_is_toasted(self):
        self.conn.fail_with = CONNECTION_REFUSED
        output = self._invoke("list", "cameras")
        self.assertEqual(output.splitlines(), ["cameras:", "error: Error loading cameras"])

    def test_status(self):
        self.conn.route("GET", "/api/cameras/status",
                        envelope([{"name": "front", "ready": True}, {"name": "back", "ready": False}]))
        output = self._invoke("status")
        self.assertEqual(output.splitlines(), [
            " front;id=1;status=online",
            " back;id=2;status=offline",
            " garage;id=3;status=disabled",
        ])

    def test_notifications(self):
        self.conn.route("GET", "/api/notifications/summary", envelope({
            "notifications": [
                {"id": 7, "title": "Disk", "message": "nearly full", "severity": "warning", "read": False},
                {"id": 6, "title": "Camera", "message": "front back online", "severity": "info", "read": True},
            ],
            "unread_count": 1,
        }))
        output = self._invoke("notifications")
        self.assertEqual(output.splitlines(), [
            "unread=1",
            " [warning] Disk: nearly full (new)",
            " [info] Camera: front back online",
        ])

    def test_mosaic_start(self):
        self.conn.route("POST", "/api/mosaics/1/start", envelope(None))
        self.conn.route("GET", "/api/mosaics", envelope([{"id": 1, "name": "lobby"}]))
        output = self._invoke("mosaic", "start", "1")
        self.assertEqual(self.conn.calls_to("POST", "/api/mosaics/1/start"), 1)
        self.assertEqual(self.conn.calls_to("GET", "/api/mosaics"), 1)
        self.assertIn("info: Starting mosaic...", output.splitlines())
        self.assertIn("success: Mosaic started", output.splitlines())

    def test_mosaic_stop_refused(self):
        self.conn.route("POST", "/api/mosaics/1/stop", envelope(None, False, "not running"))
        output = self._invoke("mosaic", "stop", "1")
        self.assertEqual(output.splitlines(), ["error: not running"])
        self.assertEqual(self.conn.calls_to("GET", "/api/mosaics"), 0)

    def test_not_logged_in(self):
        def anonymous(**kwargs):
            kwargs["save_state"] = False
            return make_nvr(connection=self.conn, token=None, **kwargs)[0]

        with mock.patch("pynvr.main.PyNvr", anonymous):
            result = CliRunner().invoke(main.cli, ["status"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertEqual(self.conn.calls, [])
