"""
Credential Lookups
Derived values computed from created cluster and registry outputs.
Each lookup is an Output: it resolves once its inputs exist and is shared
by every consumer, so nothing here runs twice per apply.
"""

import base64
import binascii
import pulumi
from pulumi_azure_native import authorization, containerregistry, containerservice
from typing import Dict, Mapping, Optional

from .config import KUBELET_IDENTITY_KEY
from .errors import KubeconfigDecodeError, MissingIdentityError


def decode_kubeconfig(result) -> str:
    """
    Decode the first kubeconfig from a list-user-credentials result

    Args:
        result: ListManagedClusterUserCredentialsResult

    Returns:
        Kubeconfig YAML as text
    """
    if not result.kubeconfigs:
        raise KubeconfigDecodeError("cluster returned no user credentials")
    encoded = result.kubeconfigs[0].value
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, TypeError, UnicodeDecodeError) as e:
        raise KubeconfigDecodeError("first cluster credential is not a base64 kubeconfig") from e


def get_cluster_kubeconfig(resource_group_name: pulumi.Output[str],
                           cluster_name: pulumi.Output[str]) -> pulumi.Output[str]:
    """Secret kubeconfig for the cluster's user credentials"""
    pulumi.log.info("Declaring kubeconfig lookup (secret)")
    creds = containerservice.list_managed_cluster_user_credentials_output(
        resource_group_name=resource_group_name,
        resource_name=cluster_name,
    )
    return pulumi.Output.secret(creds.apply(decode_kubeconfig))


def get_registry_credentials(resource_group_name: pulumi.Output[str],
                             registry_name: pulumi.Output[str]) -> Dict[str, pulumi.Output[str]]:
    """
    Admin credentials of a container registry

    Args:
        resource_group_name: Resource group holding the registry
        registry_name: Registry name

    Returns:
        Dict with secret username and password outputs
    """
    pulumi.log.info("Declaring registry credentials lookup (secret)")
    creds = containerregistry.list_registry_credentials_output(
        resource_group_name=resource_group_name,
        registry_name=registry_name,
    )
    return {
        "username": pulumi.Output.secret(creds.apply(lambda c: c.username)),
        "password": pulumi.Output.secret(creds.apply(lambda c: c.passwords[0].value)),
    }


def lookup_role_definition(role_definition_id: str, scope: pulumi.Output[str]):
    """Resolve a built-in role definition by GUID at the given scope"""
    return authorization.get_role_definition_output(
        role_definition_id=role_definition_id,
        scope=scope,
    )


def kubelet_object_id(identity_profile: Optional[Mapping[str, object]]) -> str:
    """Object id of the node identity; the control-plane identity is never used"""
    if not identity_profile or KUBELET_IDENTITY_KEY not in identity_profile:
        raise MissingIdentityError(f"identity profile has no {KUBELET_IDENTITY_KEY!r} entry")
    return identity_profile[KUBELET_IDENTITY_KEY].object_id
