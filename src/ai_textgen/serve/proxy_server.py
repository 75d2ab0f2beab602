"""Helper to launch the FastAPI proxy under uvicorn from Python."""
from __future__ import annotations
import os
import subprocess
import sys

def main() -> None:
    host = os.getenv("PROXY_HOST", "0.0.0.0")
    port = os.getenv("PORT", "3001")
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "ai_textgen.serve.fastapi_app:app",
        "--host", host,
        "--port", str(port),
        "--log-level", log_level,
    ]
    subprocess.run(cmd, check=True)

if __name__ == "__main__":
    main()
