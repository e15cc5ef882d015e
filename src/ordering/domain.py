"""Ordering bounded context: cart, checkout, orders and admin reporting.

Handles the customer's cart, the checkout flow that turns it into a pending
order, payment confirmation, and the back-office views over orders.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
