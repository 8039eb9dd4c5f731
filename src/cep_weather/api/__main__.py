"""
cep_weather.api.__main__

Entrypoint for running a service via `python -m cep_weather.api` (role from `CEP_ROLE`).

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from cep_weather.api.app import create_app
from cep_weather.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# docker-compose runs two containers from one image: CEP_ROLE=gateway and
# CEP_ROLE=orchestrator, with CEP_ORCHESTRATOR_URL pointing the first at the second.
