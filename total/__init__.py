"""Total — peer-to-peer chat bootstrap: identity, friends, and a TCP listener."""

__version__ = "0.1.0"

from total.config import TotalConfig
from total.models import DEFAULT_PORT, Identity

__all__ = ["DEFAULT_PORT", "Identity", "TotalConfig", "__version__"]
