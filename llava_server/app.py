#!/usr/bin/env python3
"""
llava-server entry point.

Parses the command line, then serves the /llava endpoint, handing queued
requests to the inference callable on a worker thread.
"""

import functools
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .command_line import (
    HELP_KEY,
    REQUIRED,
    complement_switch_option,
    default_valued_option,
    help_switch,
    integer,
    parse_command_line,
    show_help,
    string,
    switch_option,
    valued_option,
)
from .config import configure_logging
from .config_node import ConfigNode
from .models import LlavaRequest
from .web_server import create_app
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)

# ============================================
# COMMAND LINE OPTIONS
# ============================================

SERVER_OPTIONS = (
    help_switch(),
    valued_option(
        "--model", string("file"), "Model.Path", "Language model weights (.gguf) to load.", REQUIRED
    ),
    valued_option(
        "--mmproj",
        string("file"),
        "Model.MMProjPath",
        "Multimodal projector weights (.gguf) bridging the image encoder to the language model.",
        REQUIRED,
    ),
    default_valued_option("--host", string("address"), "localhost", "Server.Host", "Host to serve on."),
    default_valued_option("--port", integer("port", 1024, 65535), "8080", "Server.Port", "Port to serve on."),
    switch_option("--log-requests", "Server.LogRequests", "Log each request and the response sent."),
    complement_switch_option("--no-log-requests", "Server.LogRequests", "Do not log requests."),
    default_valued_option(
        "--threads", integer("count", 1, 1024), "4", "Inference.Threads", "Number of CPU threads used for generation."
    ),
    default_valued_option(
        "--ctx-size",
        integer("tokens", 2048, 1048576),
        "2048",
        "Inference.ContextSize",
        "Context size in tokens. Must be large enough to hold the image embeddings and the prompt.",
    ),
    default_valued_option(
        "--max-tokens", integer("tokens", 1, 65536), "256", "Inference.MaxTokens", "Maximum number of tokens to generate."
    ),
    switch_option("--print-config", "PrintConfig", "Print the parsed configuration as YAML and exit."),
)


@dataclass
class ServerSettings:
    model_path: str
    mmproj_path: str
    host: str
    port: int
    log_requests: bool
    threads: int
    context_size: int
    max_tokens: int

    @classmethod
    def from_config(cls, config: ConfigNode) -> "ServerSettings":
        return cls(
            model_path=config.get("Model.Path").value_as(str),
            mmproj_path=config.get("Model.MMProjPath").value_as(str),
            host=config.get("Server.Host").value_as(str),
            port=config.get("Server.Port").value_as(int),
            log_requests=config["Server.LogRequests"].value_as_default(bool, False),
            threads=config.get("Inference.Threads").value_as(int),
            context_size=config.get("Inference.ContextSize").value_as(int),
            max_tokens=config.get("Inference.MaxTokens").value_as(int),
        )


def log_request_summary(settings: ServerSettings, request: LlavaRequest):
    """Default inference callable, used when no model runtime is attached"""
    summary = request.to_summary_dict()
    logger.info(
        f"Request {summary['id']}: {summary['image_buffer_size']} image bytes, prompt {summary['prompt']!r} "
        f"(model: {settings.model_path}, mmproj: {settings.mmproj_path}, threads: {settings.threads}, "
        f"ctx-size: {settings.context_size}, max-tokens: {settings.max_tokens})"
    )


def main(
    argv: Optional[Sequence[str]] = None,
    perform_inference: Optional[Callable[[ServerSettings, LlavaRequest], None]] = None,
) -> int:
    """
    Run the server.

    Args:
        argv: Command line including the program name (default: sys.argv)
        perform_inference: Called on the worker thread with the server settings
            and each queued request (default: log_request_summary)

    Returns:
        Process exit code
    """
    configure_logging()

    args = list(sys.argv if argv is None else argv)
    result = parse_command_line(SERVER_OPTIONS, args)
    config = result.config

    if result.state.exit:
        help_shown = len(args) <= 1 or config[HELP_KEY].value_as_default(bool, False)
        if result.state.parse_error and not help_shown:
            show_help(SERVER_OPTIONS, args)
        return 1 if result.state.parse_error else 0

    if config["PrintConfig"].value_as_default(bool, False):
        sys.stdout.write(config.to_yaml())
        return 0

    settings = ServerSettings.from_config(config)

    work_queue = WorkQueue(functools.partial(perform_inference or log_request_summary, settings))
    work_queue.start()

    app = create_app(work_queue.push, enable_logging=settings.log_requests)
    logger.info(f"Starting llava-server on {settings.host}:{settings.port} (model: {settings.model_path})")
    try:
        app.run(host=settings.host, port=settings.port)
    finally:
        work_queue.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
