from .loader import load_config
from .models import DocweaveConfig, TransformerConfig

__all__ = [
    "DocweaveConfig",
    "TransformerConfig",
    "load_config",
]
