"""401(k) contribution planner: contribution math plus a small Flask API."""

from planner.app import create_app

__all__ = ["create_app"]
