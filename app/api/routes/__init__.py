"""
API Routes Package
"""
from . import (
    health,
    payments,
    webhooks,
)
