"""Permite `python -m renderapi ...`."""

from __future__ import annotations

from renderapi.cli.main import run

if __name__ == "__main__":
    run()
