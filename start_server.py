#!/usr/bin/env python3
"""Start the API with uvicorn, honouring the PORT and HOST environment variables."""

import os
import subprocess
import sys

port = os.environ.get("PORT", "8000")
try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

host = os.environ.get("HOST", "0.0.0.0")

# The package lives under src/ when running from a checkout.
src_path = os.path.abspath("src")
pythonpath = os.environ.get("PYTHONPATH", "")
if os.path.isdir(src_path):
    os.environ["PYTHONPATH"] = f"{src_path}:{pythonpath}" if pythonpath else src_path
    sys.path.insert(0, src_path)

cmd = [
    sys.executable,
    "-m",
    "uvicorn",
    "agrizone.main:app",
    "--host",
    host,
    "--port",
    str(port_int),
    "--proxy-headers",
]

try:
    import agrizone.main  # noqa: F401
except ImportError as e:
    print(f"Failed to import agrizone.main: {e}", file=sys.stderr)
    print(f"   PYTHONPATH: {os.environ.get('PYTHONPATH', 'NOT SET')}", file=sys.stderr)
    sys.exit(1)

print(f"Starting server on {host}:{port_int}...", file=sys.stderr)
try:
    sys.exit(subprocess.call(cmd))
except KeyboardInterrupt:
    print("Server interrupted by user", file=sys.stderr)
    sys.exit(0)
