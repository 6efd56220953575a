"""Network helper used by groupkart.main to print the LAN URL of the API."""
import socket


def get_local_ip(target_host: str = "8.8.8.8") -> str:
    """Return the local interface address used to reach target_host, or '127.0.0.1'.

    A UDP connect only selects a route; nothing is sent on the wire.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect((target_host, 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip
