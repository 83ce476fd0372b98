"""
Resource Group
Root scope for every Azure resource in the topology
"""
import pulumi
from pulumi_azure_native import resources


def create_resource_group(cfg):
    """Create the resource group everything else lives in"""
    pulumi.log.info(f"Declaring resource group {cfg.resource_group_name}")

    resource_group = resources.ResourceGroup(cfg.resource_group_name,
        resource_group_name=cfg.resource_group_name)

    return {
        "resource_group": resource_group,
        "resource_group_name": resource_group.name,
        "location": resource_group.location,
    }
