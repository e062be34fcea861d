"""
Web server accepting multimodal prompts on the /llava endpoint.

Requests are not processed here; each one is handed off (typically to a
WorkQueue) and acknowledged immediately.
"""

import logging
from datetime import datetime
from typing import Callable

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from .models import LlavaRequest

logger = logging.getLogger(__name__)

llava_bp = Blueprint("llava", __name__)

INDEX_HTML = """<form id="formElem">
  <span>Prompt: </span><input type="text" name="prompt" accept="text/*"><br>
  <input type="file" name="image_file" accept="image/*"><br>
  <input type="submit">
</form>
<script>
  formElem.onsubmit = async (e) => {
    e.preventDefault();
    let res = await fetch('/llava', {
      method: 'POST',
      body: new FormData(formElem)
    });
    console.log(await res.text());
  };
</script>
"""


def _timestamp() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _error(code: str, message: str, status: int):
    return jsonify(
        {
            "error": {"code": code, "message": message},
            "timestamp": _timestamp(),
        }
    ), status


@llava_bp.route("/", methods=["GET"])
def index():
    """Serve the upload form"""
    return INDEX_HTML, 200, {"Content-Type": "text/html"}


@llava_bp.route("/api/health", methods=["GET"])
def health():
    """Health check endpoint"""
    return jsonify({"status": "healthy", "timestamp": _timestamp()})


@llava_bp.route("/llava", methods=["POST"])
def llava():
    """Accept a prompt and image (multipart form) and queue it for inference"""
    prompt = request.form.get("prompt")
    if prompt is None and "prompt" in request.files:
        prompt = request.files["prompt"].read().decode("utf-8", errors="replace")
    if prompt is None:
        return _error("MISSING_PROMPT", "Form field 'prompt' is required", 400)

    image_file = request.files.get("image_file")
    if image_file is None:
        return _error("MISSING_IMAGE", "Form field 'image_file' is required", 400)

    try:
        llava_request = LlavaRequest(prompt=prompt, image=image_file.read())
        current_app.config["HAND_OFF_REQUEST"](llava_request)
        return jsonify({"status": "queued", "id": llava_request.id, "timestamp": _timestamp()}), 202
    except Exception as e:
        logger.error(f"Failed to queue request: {e}", exc_info=True)
        return _error("QUEUE_FAILED", str(e), 500)


def _log_request(response):
    logger.info(
        f"{request.method} {request.path} -> {response.status_code}\n"
        f"{response.get_data(as_text=True) if not response.direct_passthrough else ''}"
    )
    return response


def _add_security_headers(response):
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "no-referrer"
    return response


def create_app(hand_off_request: Callable[[LlavaRequest], None], enable_logging: bool = False) -> Flask:
    """
    Create the Flask app.

    Args:
        hand_off_request: Called with each LlavaRequest received
        enable_logging: Log every request and its response
    """
    app = Flask(__name__)
    CORS(app)
    app.config["HAND_OFF_REQUEST"] = hand_off_request
    app.register_blueprint(llava_bp)
    if enable_logging:
        app.after_request(_log_request)
    app.after_request(_add_security_headers)
    return app
