import logging
import queue
import threading
from typing import Callable, Optional

from .models import LlavaRequest

logger = logging.getLogger(__name__)

# Pushed by stop() to wake the worker and end its loop
_STOP = object()


class WorkQueue:
    """
    FIFO of inference requests drained by a single worker thread.

    The web server only enqueues; requests are handed to perform_inference
    one at a time, in arrival order, on the worker thread.
    """

    def __init__(self, perform_inference: Callable[[LlavaRequest], None]):
        self.perform_inference = perform_inference
        self._queue: "queue.Queue" = queue.Queue()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    def push(self, request: LlavaRequest):
        self._queue.put(request)
        logger.debug(f"Queued request {request.id} ({self.pending()} pending)")

    def pending(self) -> int:
        return self._queue.qsize()

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        with self._lock:
            if self.is_running():
                return
            self._thread = threading.Thread(target=self._run, name="llava-worker", daemon=True)
            self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        """Stop the worker after the requests already queued are processed"""
        with self._lock:
            thread = self._thread
            if thread is None:
                return
            if not thread.is_alive():
                self._thread = None
                return
            self._queue.put(_STOP)
            thread.join(timeout)
            if thread.is_alive():
                # Keep the handle; start() must not add a second consumer
                logger.warning(f"Worker still busy after {timeout}s; it will stop once queued requests are done")
                return
            self._thread = None

    def _run(self):
        while True:
            request = self._queue.get()
            try:
                if request is _STOP:
                    return
                logger.info(f"Prompt: {request.prompt}")
                self.perform_inference(request)
            except Exception as e:
                logger.error(f"Inference failed for request {request.id}: {e}", exc_info=True)
            finally:
                self._queue.task_done()
