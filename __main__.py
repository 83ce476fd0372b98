"""
WASM workloads on AKS
Resource group, cluster with a WASI node pool, ACR, image push, Spin app
"""
from wasm_aks import create_topology, export_outputs, get_config

# Configuration
config = get_config()

# Resource group -> cluster + WASI pool -> registry -> image -> Kubernetes objects
topology = create_topology(config)

# Exports
export_outputs(topology)
