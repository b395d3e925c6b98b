import threading
import time
import traceback

from .logger import NvrLogger


class NvrBackgroundWorker(threading.Thread):

    _log: NvrLogger
    _id: int = 0
    _stop_thread: bool = False

    def __init__(self, log: NvrLogger):
        super().__init__()

        self._log = log.component("background")
        self._lock = threading.Condition()
        self._queue = {}
        self._running_id = None
        self._running_cancelled = False
        self._log.debug("worker started")

    def _next_id(self):
        self._id += 1
        return str(self._id) + ":" + str(time.monotonic())

    def _run_next(self):

        # timeout in the future
        timeout = time.monotonic() + 60

        # go by priority...
        for prio in sorted(self._queue.keys()):

            # jobs in particular priority
            for run_at, job_id in sorted(self._queue[prio].keys()):
                if run_at <= time.monotonic():
                    job = self._queue[prio].pop((run_at, job_id))
                    self._running_id = job_id
                    self._running_cancelled = False
                    self._lock.release()

                    # run it
                    try:
                        job["callback"](**job["args"])
                    except Exception as e:
                        self._log.error(
                            f"job-error={type(e).__name__}\n{traceback.format_exc()}"
                        )

                    # reschedule? not if it was cancelled while running
                    self._lock.acquire()
                    run_every = job.get("run_every", None)
                    if run_every and not self._running_cancelled:
                        run_at = max(run_at + run_every, time.monotonic())
                        self._queue[prio][(run_at, job_id)] = job
                    self._running_id = None

                    # start going through list again
                    return None
                else:
                    if run_at < timeout:
                        timeout = run_at
                    break

        return timeout

    def run(self):

        with self._lock:
            while not self._stop_thread:

                # loop till done
                timeout = None
                while timeout is None and not self._stop_thread:
                    timeout = self._run_next()
                if timeout is None:
                    break

                # wait or get going?
                now = time.monotonic()
                if now < timeout:
                    self._lock.wait(timeout - now)

    def queue_job(self, run_at, prio, job):
        self._log.vdebug(f"queue-job={job}")
        with self._lock:
            job_id = self._next_id()
            if prio not in self._queue:
                self._queue[prio] = {}
            self._queue[prio][(run_at, job_id)] = job
            self._lock.notify()
        return job_id

    def stop_job(self, to_delete):
        with self._lock:
            if to_delete == self._running_id:
                self._running_cancelled = True
                return True
            for prio in self._queue.keys():
                for run_at, job_id in self._queue[prio].keys():
                    if job_id == to_delete:
                        del self._queue[prio][(run_at, job_id)]
                        return True
        return False

    def has_job(self, to_find):
        with self._lock:
            if to_find == self._running_id and not self._running_cancelled:
                return True
            for prio in self._queue.keys():
                for _run_at, job_id in self._queue[prio].keys():
                    if job_id == to_find:
                        return True
        return False

    def job_count(self):
        with self._lock:
            return sum(len(jobs) for jobs in self._queue.values())

    def stop(self):
        with self._lock:
            self._stop_thread = True
            self._lock.notify()
        if self is not threading.current_thread():
            self.join(10)


class NvrBackground:
    """Run jobs now, later or repeatedly on a single worker thread.

    Every `run*` call returns a job id that can be passed to `cancel`.
    Repeating jobs keep their id across runs.
    """

    _worker: NvrBackgroundWorker

    def __init__(self, log: NvrLogger, name: str = "NvrBackgroundWorker"):
        self._worker = NvrBackgroundWorker(log)
        self._worker.name = name
        self._worker.daemon = True
        self._worker.start()
        log.component("background").debug("created")

    def _run(self, bg_cb, prio, **kwargs):
        job = {"callback": bg_cb, "args": kwargs}
        return self._worker.queue_job(time.monotonic(), prio, job)

    def run(self, bg_cb, **kwargs):
        return self._run(bg_cb, 40, **kwargs)

    def _run_in(self, bg_cb, prio, seconds, **kwargs):
        job = {"callback": bg_cb, "args": kwargs}
        return self._worker.queue_job(time.monotonic() + seconds, prio, job)

    def run_in(self, bg_cb, seconds, **kwargs):
        return self._run_in(bg_cb, 40, seconds, **kwargs)

    def _run_every(self, bg_cb, prio, seconds, first_in, **kwargs):
        job = {"run_every": seconds, "callback": bg_cb, "args": kwargs}
        return self._worker.queue_job(time.monotonic() + first_in, prio, job)

    def run_now_and_every(self, bg_cb, seconds, **kwargs):
        """Run the job straight away then every `seconds` after that.
        """
        return self._run_every(bg_cb, 40, seconds, 0, **kwargs)

    def cancel(self, to_delete):
        if to_delete is not None:
            return self._worker.stop_job(to_delete)
        return False

    def is_scheduled(self, job_id) -> bool:
        if job_id is None:
            return False
        return self._worker.has_job(job_id)

    @property
    def job_count(self) -> int:
        return self._worker.job_count()

    def stop(self):
        self._worker.stop()
