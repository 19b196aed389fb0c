import os

# ---------------- Env ----------------
DATABASE_URL = os.getenv("DATABASE_URL")
RABBIT_URL = os.getenv("RABBIT_URL")

USERS_URL = os.getenv("USERS_URL", "http://users:8080")
INVENTORY_URL = os.getenv("INVENTORY_URL", "http://inventory:8083")
PAYMENTS_URL = os.getenv("PAYMENTS_URL", "http://payments:8084")

# seconds, applied to every outbound call on its own
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "5"))

STOCK_QUEUE = os.getenv("STOCK_QUEUE", "order-inventory")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# users mock only: comma separated ids answered with 200
MOCK_USER_IDS = os.getenv("MOCK_USER_IDS", "1,2,3")
