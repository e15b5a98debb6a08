"""Warehouse bounded context — products, suppliers and the stock ledgers.

Stock is tracked as two append-only ledgers per product: entries (stock
received from suppliers) and withdrawals (stock drawn down). Available stock
is never stored; it is derived from the ledgers whenever it is needed.
"""

from protean.domain import Domain

from warehouse.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
warehouse = Domain(name="warehouse")
