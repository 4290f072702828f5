import logging
import os
import socket

from dq_dashboard.ui.dash_app import create_dash_app
from dq_dashboard.logging_config import configure_logging

configure_logging()

logger = logging.getLogger(__name__)

CONFIG_ROOT_ENV = "DQ_DASHBOARD_CONFIG_ROOT"

app = create_dash_app(os.getenv(CONFIG_ROOT_ENV, "config"))
server = app.server


def find_free_port(start_port: int, attempts: int = 100) -> int:
    """First port in [start_port, start_port + attempts) nothing listens on."""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    return start_port


def main() -> None:
    preferred_port = int(os.getenv("PORT", "8050"))
    port = find_free_port(preferred_port)
    debug = os.getenv("DEBUG", "0") == "1"

    if port != preferred_port:
        logger.warning("Preferred port taken, using another", extra={"preferred_port": preferred_port, "port": port})

    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
