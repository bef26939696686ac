"""Generate a local development secret for JWT signing."""

from __future__ import annotations

import secrets
from pathlib import Path


KEYS_DIR = Path(__file__).resolve().parent
SECRET_PATH = KEYS_DIR / "dev.jwt_secret"


def main() -> int:
    """Write a random secret once and skip when the file already exists."""
    if SECRET_PATH.exists():
        print(f"Secret already exists, skipping: {SECRET_PATH}")
        return 0

    KEYS_DIR.mkdir(parents=True, exist_ok=True)
    SECRET_PATH.write_text(secrets.token_urlsafe(48), encoding="utf-8")
    SECRET_PATH.chmod(0o600)
    print(f"Generated: {SECRET_PATH}")
    print(f"Run with: JWT_SECRET_KEY_PATH={SECRET_PATH}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
