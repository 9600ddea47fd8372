"""Domain initialization and configuration."""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging before any element registers itself
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
