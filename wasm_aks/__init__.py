"""
Pulumi functions for the WASM AKS stack
Simple function-based approach, one module per concern
"""

from .config import get_config
from .topology import create_topology, export_outputs

__all__ = [
    "get_config",
    "create_topology",
    "export_outputs"
]
