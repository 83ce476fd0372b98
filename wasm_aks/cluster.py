"""
AKS Cluster Functions
Creates the managed cluster and its WASI-enabled agent pool
"""

import pulumi
from pulumi_azure_native import containerservice
from typing import Dict


def create_managed_cluster(cfg, resource_group_name: pulumi.Output[str]) -> Dict[str, any]:
    """
    Create AKS managed cluster with an inline system pool

    Args:
        cfg: Deployment configuration
        resource_group_name: Resource group the cluster is created in

    Returns:
        Dict with cluster resource and outputs
    """
    pulumi.log.info(f"Declaring managed cluster {cfg.cluster_name} (Kubernetes {cfg.kubernetes_version})")

    cluster = containerservice.ManagedCluster(
        cfg.cluster_name,
        resource_group_name=resource_group_name,
        kubernetes_version=cfg.kubernetes_version,
        resource_name_=cfg.cluster_name,
        identity=containerservice.ManagedClusterIdentityArgs(
            type=containerservice.ResourceIdentityType.SYSTEM_ASSIGNED
        ),
        dns_prefix=cfg.cluster_name,
        agent_pool_profiles=[
            containerservice.ManagedClusterAgentPoolProfileArgs(
                name=cfg.system_pool_name,
                mode="System",
                os_disk_size_gb=cfg.system_pool_disk_size,
                os_type="Linux",
                count=cfg.node_count,
                vm_size=cfg.vm_size
            )
        ]
    )

    return {
        "cluster": cluster,
        "cluster_name": cluster.name,
        "identity_profile": cluster.identity_profile
    }


def create_wasm_agent_pool(cfg, resource_group_name: pulumi.Output[str],
                           cluster_name: pulumi.Output[str]) -> Dict[str, any]:
    """
    Create an agent pool that runs WebAssembly (WASI) workloads

    Args:
        cfg: Deployment configuration
        resource_group_name: Resource group of the cluster
        cluster_name: Managed cluster the pool attaches to

    Returns:
        Dict with agent pool resource and outputs
    """
    pulumi.log.info(f"Declaring WASI agent pool {cfg.wasm_pool_name}")

    # Without workload_runtime AKS provisions ordinary OCI container nodes
    agent_pool = containerservice.AgentPool(
        f"{cfg.cluster_name}-{cfg.wasm_pool_name}",
        agent_pool_name=cfg.wasm_pool_name,
        resource_group_name=resource_group_name,
        resource_name_=cluster_name,
        workload_runtime=containerservice.WorkloadRuntime.WASM_WASI,
        count=cfg.node_count,
        vm_size=cfg.vm_size,
        os_type="Linux"
    )

    return {
        "agent_pool": agent_pool,
        "agent_pool_name": agent_pool.name
    }
