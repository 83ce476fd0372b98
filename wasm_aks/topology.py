"""
WASM AKS Topology
Wires every resource of the stack together in one declaration pass.
The engine parallelises whatever the edges below leave independent.
"""
import pulumi

from .cluster import create_managed_cluster, create_wasm_agent_pool
from .credentials import get_cluster_kubeconfig, get_registry_credentials
from .registry import build_and_push_image, create_registry, grant_registry_pull
from .resource_group import create_resource_group
from .workload import create_kubernetes_provider, create_namespace, deploy_wasm_app, expose_wasm_app


def create_topology(cfg):
    """Declare the full stack and return its resources keyed by role"""

    # 1. Azure infrastructure
    resource_group = create_resource_group(cfg)
    rg_name = resource_group["resource_group_name"]

    cluster = create_managed_cluster(cfg, rg_name)
    agent_pool = create_wasm_agent_pool(cfg, rg_name, cluster["cluster_name"])
    registry = create_registry(cfg, resource_group["resource_group"])

    # 2. Derived secrets, resolved once and shared
    kubeconfig = get_cluster_kubeconfig(rg_name, cluster["cluster_name"])
    registry_credentials = get_registry_credentials(rg_name, registry["registry_name"])

    infrastructure = [cluster["cluster"], agent_pool["agent_pool"], registry["registry"]]

    # 3. Node pull access and the image
    role_assignment = grant_registry_pull(
        cfg, cluster["cluster"], agent_pool["agent_pool"], registry["registry"])
    image = build_and_push_image(cfg, registry["registry"], registry_credentials, infrastructure)

    # 4. Kubernetes objects on the new cluster
    provider = create_kubernetes_provider(cfg.cluster_name, kubeconfig, infrastructure)
    namespace = create_namespace(cfg, provider, [image["image"]])
    deployment = deploy_wasm_app(cfg, provider, namespace["namespace_name"], image["image_name"],
                                 infrastructure + [image["image"]])
    service = expose_wasm_app(cfg, provider, namespace["namespace_name"], deployment["deployment"],
                              [image["image"]])

    return {
        "resource_group": resource_group,
        "cluster": cluster,
        "agent_pool": agent_pool,
        "registry": registry,
        "kubeconfig": kubeconfig,
        "registry_credentials": registry_credentials,
        "role_assignment": role_assignment,
        "image": image,
        "provider": provider,
        "namespace": namespace,
        "deployment": deployment,
        "service": service,
    }


def export_outputs(topology) -> None:
    pulumi.export("resourceGroupName", topology["resource_group"]["resource_group_name"])
    pulumi.export("wasmClusterName", topology["cluster"]["cluster_name"])
    pulumi.export("wasmAgentPoolName", topology["agent_pool"]["agent_pool_name"])
    pulumi.export("kubeconfig", pulumi.Output.secret(topology["kubeconfig"]))
