import threading
import time
from unittest import TestCase

from pynvr import (
    NvrBackground,
    NvrLogger,
)
from tests.fakes import wait_for


_log = NvrLogger()


class TestNvrBackground(TestCase):

    def setUp(self):
        self.bg = NvrBackground(_log)

    def tearDown(self):
        self.bg.stop()

    def test_run(self):
        done = threading.Event()
        self.bg.run(done.set)
        self.assertTrue(done.wait(2))

    def test_run_in_keeps_fractions(self):
        done = threading.Event()
        start = time.monotonic()
        self.bg.run_in(done.set, 0.3)
        self.assertTrue(done.wait(2))
        self.assertGreaterEqual(time.monotonic() - start, 0.25)

    def test_run_now_and_every(self):
        ticks = []
        job_id = self.bg.run_now_and_every(lambda: ticks.append(time.monotonic()), 0.1)
        self.assertTrue(wait_for(lambda: len(ticks) >= 3))
        self.assertTrue(self.bg.is_scheduled(job_id))
        self.assertTrue(self.bg.cancel(job_id))
        self.assertFalse(self.bg.is_scheduled(job_id))

        count = len(ticks)
        time.sleep(0.3)
        self.assertLessEqual(len(ticks), count + 1)

    def test_cancel_while_running(self):
        started = threading.Event()
        release = threading.Event()
        ticks = []

        def tick():
            ticks.append(1)
            started.set()
            release.wait(2)

        job_id = self.bg.run_now_and_every(tick, 0.05)
        self.assertTrue(started.wait(2))
        self.assertTrue(self.bg.cancel(job_id))
        release.set()
        time.sleep(0.2)
        self.assertEqual(len(ticks), 1)
        self.assertEqual(self.bg.job_count, 0)

    def test_cancel_unknown(self):
        self.assertFalse(self.bg.cancel("nope"))
        self.assertFalse(self.bg.cancel(None))

    def test_job_error_does_not_kill_worker(self):
        def broken():
            raise RuntimeError("boom")

        done = threading.Event()
        self.bg.run(broken)
        self.bg.run(done.set)
        self.assertTrue(done.wait(2))
