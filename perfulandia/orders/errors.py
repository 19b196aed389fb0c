"""
Failures a caller of OrderOrchestrator can see.

Only the steps up to and including persistence raise. Payment registration
and the stock event happen after the order exists and never surface here.
"""


class OrderError(Exception):
    pass


class InvalidInput(OrderError):
    pass


class CustomerNotFound(OrderError):
    def __init__(self, customer_id: int):
        super().__init__(f"Customer {customer_id} does not exist, the order cannot be created.")
        self.customer_id = customer_id


class ProductNotFound(OrderError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found in inventory")
        self.product_id = product_id


class InsufficientStock(OrderError):
    def __init__(self, product_id: int, available: int, requested: int):
        super().__init__(f"Insufficient stock. Available: {available}")
        self.product_id = product_id
        self.available = available
        self.requested = requested


class OrchestrationFailure(OrderError):
    pass
