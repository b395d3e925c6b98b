from unittest import TestCase

from pynvr import (
    NvrCfg,
    NvrLogger,
)


_log = NvrLogger()


class TestNvrCfg(TestCase):
    def test_scheme(self):
        cfg = NvrCfg(log=_log)
        self.assertEqual(cfg._remove_scheme("abc.com"), "abc.com")
        self.assertEqual(cfg._remove_scheme("https://abc.com"), "abc.com")
        self.assertEqual(cfg._add_scheme("abc.com"), "https://abc.com")
        self.assertEqual(cfg._add_scheme("https://abc.com"), "https://abc.com")
        self.assertEqual(cfg._add_scheme("http://abc.com"), "http://abc.com")
        self.assertEqual(cfg._add_scheme("abc.com", "ws"), "ws://abc.com")

    def test_host_00(self):
        cfg = NvrCfg(log=_log)
        self.assertEqual(cfg.host, "http://localhost:8080")
        self.assertEqual(cfg.host_name, "localhost:8080")

    def test_host_10(self):
        cfg = NvrCfg(log=_log, host="nvr.host.com:8080")
        self.assertEqual(cfg.host, "http://nvr.host.com:8080")
        self.assertEqual(cfg.host_name, "nvr.host.com:8080")

    def test_host_20(self):
        cfg = NvrCfg(log=_log, host="https://nvr.host.com/")
        self.assertEqual(cfg.host, "https://nvr.host.com")
        self.assertEqual(cfg.host_name, "nvr.host.com")

    def test_defaults(self):
        cfg = NvrCfg(log=_log)
        self.assertEqual(cfg.auth_scheme, "cookie")
        self.assertEqual(cfg.session_cookie, "session")
        self.assertEqual(cfg.toast_timeout, 3.5)
        self.assertEqual(cfg.status_poll_interval, 30)
        self.assertEqual(cfg.notification_poll_interval, 30)
        self.assertEqual(cfg.login_path, "/login")
        self.assertIsNone(cfg.request_timeout)
        self.assertEqual(cfg.state_file, "./pynvr.pickle")
        self.assertEqual(cfg.cookies_file, "./cookies.txt")

    def test_auth_scheme(self):
        self.assertEqual(NvrCfg(log=_log, auth_scheme="BEARER").auth_scheme, "bearer")
        self.assertEqual(NvrCfg(log=_log, auth_scheme="magic").auth_scheme, "cookie")

    def test_no_state(self):
        cfg = NvrCfg(log=_log, save_state=False, storage_dir="/tmp/nvr")
        self.assertIsNone(cfg.state_file)
        self.assertIsNone(cfg.cookies_file)

    def test_storage_dir(self):
        cfg = NvrCfg(log=_log, storage_dir="/tmp/nvr")
        self.assertEqual(cfg.state_file, "/tmp/nvr/pynvr.pickle")
        self.assertEqual(cfg.cookies_file, "/tmp/nvr/cookies.txt")
