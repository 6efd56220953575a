import logging

import uvicorn
from groupkart.api.api_run import app
from groupkart.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL
from groupkart.utilities.network import get_local_ip


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    local_url = f"http://localhost:{APP_PORT}"
    local_ip = get_local_ip()
    lan_url = f"http://{local_ip}:{APP_PORT}"
    # Cart API on this machine
    print(f"Uvicorn running on {local_url} (Press CTRL+C to quit)")
    # Phones on the same Wi-Fi can share the cart through the LAN address
    if local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: {lan_url}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
