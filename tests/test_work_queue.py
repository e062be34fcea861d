import logging
import threading
import pytest

from llava_server.models import LlavaRequest
from llava_server.work_queue import WorkQueue


def _request(prompt):
    return LlavaRequest(prompt=prompt, image=b"img")


class TestWorkQueue:
    def test_processes_in_order(self):
        seen = []
        work_queue = WorkQueue(lambda request: seen.append(request.prompt))
        for prompt in ["first", "second", "third"]:
            work_queue.push(_request(prompt))
        assert work_queue.pending() == 3

        work_queue.start()
        assert work_queue.is_running() is True
        work_queue.stop(timeout=5)

        assert seen == ["first", "second", "third"]
        assert work_queue.pending() == 0
        assert work_queue.is_running() is False

    def test_failure_does_not_stop_worker(self, caplog):
        seen = []

        def perform(request):
            if request.prompt == "bad":
                raise RuntimeError("model crashed")
            seen.append(request.prompt)

        work_queue = WorkQueue(perform)
        work_queue.start()
        work_queue.push(_request("bad"))
        work_queue.push(_request("good"))
        work_queue.stop(timeout=5)

        assert seen == ["good"]
        assert "model crashed" in caplog.text

    def test_logs_prompt(self, caplog):
        caplog.set_level(logging.INFO, logger="llava_server.work_queue")
        done = threading.Event()
        work_queue = WorkQueue(lambda request: done.set())
        work_queue.start()
        work_queue.push(_request("what is this?"))
        assert done.wait(timeout=5)
        work_queue.stop(timeout=5)
        assert "Prompt: what is this?" in caplog.text

    def test_start_twice_keeps_one_worker(self):
        work_queue = WorkQueue(lambda request: None)
        work_queue.start()
        thread = work_queue._thread
        work_queue.start()
        assert work_queue._thread is thread
        work_queue.stop(timeout=5)

    def test_stop_timeout_keeps_single_worker(self, caplog):
        release = threading.Event()
        started = threading.Event()
        seen = []

        def perform(request):
            started.set()
            release.wait(timeout=5)
            seen.append(request.prompt)

        work_queue = WorkQueue(perform)
        work_queue.start()
        work_queue.push(_request("slow"))
        assert started.wait(timeout=5)

        work_queue.stop(timeout=0.01)
        assert "Worker still busy" in caplog.text
        assert work_queue.is_running() is True
        thread = work_queue._thread

        work_queue.start()
        assert work_queue._thread is thread

        release.set()
        thread.join(timeout=5)
        assert seen == ["slow"]
        assert work_queue.is_running() is False

    def test_stop_without_start(self):
        work_queue = WorkQueue(lambda request: None)
        work_queue.stop()
        assert work_queue.is_running() is False


class TestLlavaRequest:
    def test_summary(self):
        request = LlavaRequest(prompt="hi", image=b"12345")
        assert request.to_summary_dict() == {"id": request.id, "prompt": "hi", "image_buffer_size": 5}

    def test_ids_unique(self):
        assert _request("a").id != _request("a").id

    @pytest.mark.parametrize("image", [b"", b"x" * 1024])
    def test_image_buffer_size(self, image):
        assert LlavaRequest(prompt="p", image=image).image_buffer_size == len(image)
