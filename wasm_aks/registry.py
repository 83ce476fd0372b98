"""
Container Registry
ACR for the WASM image, node pull access, and the image build/push
"""

import pulumi
import pulumi_docker as docker
from pulumi_azure_native import authorization, containerregistry
from typing import Dict, List

from .config import ACR_PULL_ROLE_DEFINITION_ID
from .credentials import kubelet_object_id, lookup_role_definition


def create_registry(cfg, resource_group) -> Dict[str, any]:
    """
    Create container registry with the admin user enabled

    Args:
        cfg: Deployment configuration
        resource_group: Resource group the registry is created in

    Returns:
        Dict with registry resource and outputs
    """
    pulumi.log.info(f"Declaring container registry {cfg.registry_name} ({cfg.registry_sku})")

    registry = containerregistry.Registry(
        cfg.registry_name,
        resource_group_name=resource_group.name,
        location=resource_group.location,
        registry_name=cfg.registry_name,
        admin_user_enabled=True,
        sku=containerregistry.SkuArgs(name=cfg.registry_sku)
    )

    return {
        "registry": registry,
        "registry_name": registry.name,
        "registry_id": registry.id
    }


def grant_registry_pull(cfg, cluster, agent_pool, registry) -> Dict[str, any]:
    """
    Let the cluster's nodes pull from the registry

    The principal is the kubelet identity from the cluster's identity
    profile; the cluster's own identity does not pull images.

    Args:
        cfg: Deployment configuration
        cluster: Managed cluster
        agent_pool: WASI agent pool
        registry: Container registry (role scope)

    Returns:
        Dict with role assignment resource and the resolved role definition
    """
    pulumi.log.info(f"Declaring AcrPull role assignment on {cfg.registry_name}")

    definition = lookup_role_definition(ACR_PULL_ROLE_DEFINITION_ID, registry.id)

    role_assignment = authorization.RoleAssignment(
        f"{cfg.cluster_name}-acr-pull",
        principal_id=cluster.identity_profile.apply(kubelet_object_id),
        principal_type=authorization.PrincipalType.SERVICE_PRINCIPAL,
        role_definition_id=definition.id,
        scope=registry.id,
        opts=pulumi.ResourceOptions(depends_on=[cluster, agent_pool, registry])
    )

    return {
        "role_assignment": role_assignment,
        "role_definition_id": definition.id
    }


def build_and_push_image(cfg, registry, credentials: Dict[str, pulumi.Output[str]],
                         depends_on: List[pulumi.Resource]) -> Dict[str, any]:
    """
    Build the WASM image locally and push it to the registry

    Args:
        cfg: Deployment configuration
        registry: Container registry receiving the push
        credentials: Registry admin username/password outputs
        depends_on: Resources that must exist before the push

    Returns:
        Dict with image resource and the pushed image name
    """
    pulumi.log.info(f"Declaring image build {cfg.image_repository}:{cfg.image_tag} for {cfg.image_platform}")

    server = registry.name.apply(lambda name: f"{name}.azurecr.io")

    image = docker.Image(
        f"{cfg.image_repository}-image",
        image_name=registry.name.apply(
            lambda name: f"{name}.azurecr.io/{cfg.image_repository}:{cfg.image_tag}"),
        build=docker.DockerBuildArgs(
            context=cfg.build_context,
            dockerfile=cfg.dockerfile,
            builder_version=docker.BuilderVersion.BUILDER_BUILD_KIT,
            platform=cfg.image_platform
        ),
        registry=docker.RegistryArgs(
            server=server,
            username=credentials["username"],
            password=credentials["password"]
        ),
        opts=pulumi.ResourceOptions(depends_on=depends_on)
    )

    return {
        "image": image,
        "image_name": image.image_name
    }
