from unittest import TestCase

from pynvr import NvrLogger


class TestNvrLogger(TestCase):

    def test_component_prefix(self):
        log = NvrLogger()
        with self.assertLogs("pynvr", level="DEBUG") as logs:
            log.component("store").debug("loaded")
            log.component("backend").warning("no credential")
            log.info("plain")
        self.assertEqual(logs.output, [
            "DEBUG:pynvr:store: loaded",
            "WARNING:pynvr:backend: no credential",
            "INFO:pynvr:plain",
        ])

    def test_last_error_is_shared(self):
        log = NvrLogger()
        store_log = log.component("store")
        with self.assertLogs("pynvr", level="ERROR") as logs:
            store_log.error("load failed")
        self.assertEqual(logs.output, ["ERROR:pynvr:store: load failed"])
        self.assertEqual(log.last_error, "load failed")
        self.assertEqual(store_log.last_error, "load failed")

    def test_vdebug(self):
        quiet = NvrLogger().component("session")
        with self.assertLogs("pynvr", level="DEBUG") as logs:
            quiet.vdebug("hidden")
            NvrLogger(verbose=True).component("session").vdebug("shown")
        self.assertIn("DEBUG:pynvr:session: shown", logs.output)
        self.assertNotIn("DEBUG:pynvr:session: hidden", logs.output)
