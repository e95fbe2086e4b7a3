"""Development entry point: ``python -m asset_server``."""

from __future__ import annotations

import uvicorn

from asset_server.config import load_config
from asset_server.main import create_app


def main() -> None:
    cfg = load_config()
    uvicorn.run(create_app(config=cfg), host=cfg.server.host, port=cfg.server.port, log_config=None)


if __name__ == "__main__":
    main()
