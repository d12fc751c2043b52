import logging
import os
import socket

from salary_explorer.ui.dash_app import create_dash_app
from salary_explorer.logging_config import configure_logging

configure_logging()
logger = logging.getLogger("salary_explorer.app")

app = create_dash_app(os.getenv("SALARY_EXPLORER_CONFIG_ROOT", "config"))
server = app.server


def port_is_free(port: int, host: str = "0.0.0.0") -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
        except OSError:
            return False
    return True


def pick_port(preferred: int, attempts: int = 100) -> int:
    """First free port in [preferred, preferred + attempts); preferred if none is."""
    for port in range(preferred, preferred + attempts):
        if port_is_free(port):
            return port
    return preferred


if __name__ == "__main__":
    preferred_port = int(os.getenv("PORT", "8051"))
    port = pick_port(preferred_port)
    if port != preferred_port:
        logger.warning("Preferred port taken", extra={"preferred_port": preferred_port, "port": port})

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")
