# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import contact_service
from . import delivery_service
from . import recipient_service
from . import registration_service

__all__ = [
    "contact_service",
    "delivery_service",
    "recipient_service",
    "registration_service",
]
