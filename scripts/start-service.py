#!/usr/bin/env python3
"""
Creator Store - FastAPI Service Entrypoint

Configures the storage backend from the command line, then runs the API
under uvicorn.

Usage:
    python start-service.py [--host HOST] [--port PORT] [--backend BACKEND] [--data-dir DIR]
"""

import argparse
import os
import sys
from pathlib import Path


def setup_environment(backend: str, data_dir: str) -> None:
    """Configure environment variables for the creator store."""
    data_path = Path(data_dir)
    data_path.mkdir(parents=True, exist_ok=True)

    os.environ.setdefault("BACKEND", backend)
    if backend == "surrealdb":
        surreal_path = data_path / "surrealdb" / "refcreators"
        surreal_path.parent.mkdir(parents=True, exist_ok=True)
        os.environ.setdefault("SURREAL_URL", f"file://{surreal_path}")
    elif backend == "sqlite":
        # SQLite goes through the SQLAlchemy backend
        os.environ["BACKEND"] = "postgres"
        os.environ.setdefault(
            "DATABASE_URL", f"sqlite+aiosqlite:///{data_path / 'creators.db'}"
        )

    # Disable Python buffering for better log output
    os.environ["PYTHONUNBUFFERED"] = "1"


def verify_imports() -> bool:
    """Verify all required modules can be imported."""
    try:
        import fastapi  # noqa: F401
        import uvicorn  # noqa: F401
        import refcreators.api  # noqa: F401
        return True
    except ImportError as e:
        print(f"[ERROR] Failed to import required module: {e}", file=sys.stderr)
        return False


def start_service(host: str, port: int) -> None:
    """Start the uvicorn server."""
    import uvicorn

    print(f"[refcreators] Starting service on {host}:{port}")
    print(f"[refcreators] Backend: {os.environ.get('BACKEND', 'unknown')}")

    uvicorn.run(
        "refcreators.api:app",
        host=host,
        port=port,
        log_level="info",
        access_log=True,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Creator Store - FastAPI Service")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument(
        "--backend",
        choices=["postgres", "sqlite", "surrealdb"],
        default="postgres",
        help="Storage backend (default: postgres)",
    )
    parser.add_argument("--data-dir", default=None, help="Data directory for embedded backends")
    args = parser.parse_args()

    data_dir = args.data_dir or os.getcwd()
    setup_environment(args.backend, data_dir)

    if not verify_imports():
        return 1

    try:
        start_service(args.host, args.port)
        return 0
    except KeyboardInterrupt:
        print("\n[refcreators] Service stopped by user")
        return 0
    except Exception as e:
        print(f"[ERROR] Service failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
