#setup: pip install -e .
#setup: python -m planner      (PLANNER_PORT / PLANNER_HOST override the bind address)

from __future__ import annotations

from planner.app import create_app
from planner.core.config import Settings


def main() -> None:
    settings = Settings()
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
