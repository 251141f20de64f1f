from __future__ import annotations

from typing import Any, Dict

DEFAULT_NETWORK_NAME = "localnet"

DEFAULT_CONFIG: Dict[str, Any] = {
    "default_network": DEFAULT_NETWORK_NAME,
    "networks": {
        DEFAULT_NETWORK_NAME: {
            "url": "http://127.0.0.1:26657",
        },
    },
    "plugins": [],
}
