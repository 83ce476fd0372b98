"""
Configuration management for the WASM AKS deployment
"""

import re
import pulumi
from typing import Dict

from .errors import ConfigError

# Built-in AcrPull role definition
ACR_PULL_ROLE_DEFINITION_ID = "7f951dda-4ed3-4680-a7ca-43fe172d538d"

# identity_profile key holding the node (kubelet) managed identity
KUBELET_IDENTITY_KEY = "kubeletidentity"

SKIP_AWAIT_ANNOTATION = "pulumi.com/skipAwait"

_REGISTRY_NAME = re.compile(r"^[a-zA-Z0-9]{5,50}$")


class Config:
    """Centralized configuration management for the WASM AKS deployment"""

    def __init__(self):
        self.config = pulumi.Config()

        # Azure Configuration
        self.resource_group_name = self.config.get("resource_group_name") or "wasm-aks-rg"

        # Cluster Configuration
        self.cluster_name = self.config.get("cluster_name") or "wasm-aks-cluster"
        self.kubernetes_version = self.config.get("kubernetes_version") or "1.25.5"
        self.vm_size = self.config.get("vm_size") or "Standard_B4ms"

        # Node Pool Configuration
        self.system_pool_name = self.config.get("system_pool_name") or "agentpool"
        self.system_pool_disk_size = self.config.get_int("system_pool_disk_size") or 30
        self.node_count = self.config.get_int("node_count") or 1
        self.wasm_pool_name = self.config.get("wasm_pool_name") or "wasmpool"

        # Registry Configuration
        self.registry_name = self.config.get("registry_name") or "wasmaksregistry"
        self.registry_sku = self.config.get("registry_sku") or "Standard"

        # Image Configuration
        self.image_repository = self.config.get("image_repository") or "aks-wasm-spin-demo"
        self.image_tag = self.config.get("image_tag") or "latest"
        self.build_context = self.config.get("build_context") or "aks-spin-demo"
        self.dockerfile = self.config.get("dockerfile") or "aks-spin-demo/Dockerfile"
        self.image_platform = self.config.get("image_platform") or "linux/amd64"

        # Workload Configuration
        self.namespace = self.config.get("namespace") or "wasm-demo"
        self.app_name = self.config.get("app_name") or "wasm-demo"
        self.runtime_class = self.config.get("runtime_class") or "wasmtime-spin-v1"
        self.replicas = self.config.get_int("replicas") or 1
        self.service_port = self.config.get_int("service_port") or 8080
        self.container_port = self.config.get_int("container_port") or 80

        self.validate()

    def validate(self) -> None:
        """Reject settings Azure or Kubernetes would refuse later in the apply"""
        if not _REGISTRY_NAME.match(self.registry_name):
            raise ConfigError(
                f"registry_name must be 5-50 alphanumeric characters, got {self.registry_name!r}"
            )
        for key in ("service_port", "container_port"):
            port = getattr(self, key)
            if not 1 <= port <= 65535:
                raise ConfigError(f"{key} must be between 1 and 65535, got {port}")
        if self.service_port == self.container_port:
            raise ConfigError("service_port must differ from container_port")
        if self.replicas < 1 or self.node_count < 1:
            raise ConfigError("replicas and node_count must be at least 1")

    @property
    def registry_server(self) -> str:
        return f"{self.registry_name}.azurecr.io"

    @property
    def app_labels(self) -> Dict[str, str]:
        """Pod labels; the deployment selector is built from these"""
        return {"app": self.app_name}

    @property
    def skip_await_annotations(self) -> Dict[str, str]:
        """Annotations telling the engine not to wait for readiness"""
        return {SKIP_AWAIT_ANNOTATION: "true"}

    @property
    def container_requests(self) -> Dict[str, str]:
        return {"cpu": "10m", "memory": "10Mi"}

    @property
    def container_limits(self) -> Dict[str, str]:
        return {"cpu": "500m", "memory": "64Mi"}


def get_config() -> Config:
    """Get the global configuration instance"""
    return Config()
