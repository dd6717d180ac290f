import logging

import requests

logger = logging.getLogger("main")


def check_network_reachability(probe_url, timeout=3):
    """True if probe_url answers with any HTTP response within timeout."""
    try:
        requests.head(probe_url, timeout=timeout, allow_redirects=False)
        return True
    except requests.RequestException as e:
        logger.info(f"Network probe to {probe_url} failed: {e}")
        return False
