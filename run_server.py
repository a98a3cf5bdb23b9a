from __future__ import annotations

import logging

import uvicorn

from config import ServerConfig

logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)


def main() -> None:
    config = ServerConfig.from_env()
    log.info("Vision Agent server on http://%s:%d", config.host, config.port)
    # uvicorn exits the process if the port cannot be bound.
    uvicorn.run("api.main:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
