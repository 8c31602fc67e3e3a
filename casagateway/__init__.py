"""
Signing proxy for the CASAGATEWAY publisher API.
"""
from .config import GatewayConfig
from .handler import handle_request, make_handler
from .profiles import FRAMER, LISTINGS, PROPERTIES, Profile, get_profile

__version__ = "1.0.0"

__all__ = [
    "GatewayConfig",
    "Profile",
    "PROPERTIES",
    "LISTINGS",
    "FRAMER",
    "get_profile",
    "handle_request",
    "make_handler",
]
