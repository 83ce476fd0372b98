"""
Workload Functions
Kubernetes objects for the WASM app, targeted at the new AKS cluster
"""

import pulumi
import pulumi_kubernetes as k8s
from typing import Dict, List


def create_kubernetes_provider(name: str, kubeconfig: pulumi.Output[str],
                               depends_on: List[pulumi.Resource]) -> k8s.Provider:
    """
    Create Kubernetes provider for the AKS cluster

    Args:
        name: Provider name prefix
        kubeconfig: Secret kubeconfig of the new cluster
        depends_on: Cluster resources the provider waits for

    Returns:
        Kubernetes provider instance
    """
    pulumi.log.info(f"Declaring Kubernetes provider {name}-k8s-provider")

    # Bound to the new cluster only, never the operator's local context
    return k8s.Provider(
        f"{name}-k8s-provider",
        kubeconfig=kubeconfig,
        enable_server_side_apply=True,
        opts=pulumi.ResourceOptions(depends_on=depends_on)
    )


def create_namespace(cfg, provider: k8s.Provider,
                     depends_on: List[pulumi.Resource]) -> Dict[str, any]:
    """Create namespace for the WASM app"""
    pulumi.log.info(f"Declaring namespace {cfg.namespace}")

    namespace = k8s.core.v1.Namespace(
        f"{cfg.namespace}-namespace",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=cfg.namespace
        ),
        opts=pulumi.ResourceOptions(provider=provider, depends_on=depends_on)
    )

    return {
        "namespace": namespace,
        "namespace_name": namespace.metadata.name
    }


def deploy_wasm_app(cfg, provider: k8s.Provider, namespace_name: 'pulumi.Output[str]',
                    image_name: 'pulumi.Output[str]',
                    depends_on: List[pulumi.Resource]) -> Dict[str, any]:
    """
    Deploy the WASM app on the WASI runtime class

    Args:
        cfg: Deployment configuration
        provider: Kubernetes provider for the AKS cluster
        namespace_name: Namespace to deploy into
        image_name: Pushed image reference
        depends_on: Resources that must exist first (image included)

    Returns:
        Dict with deployment resource and outputs
    """
    pulumi.log.info(f"Declaring deployment {cfg.app_name} on runtime class {cfg.runtime_class}")

    deployment = k8s.apps.v1.Deployment(
        f"{cfg.app_name}-deployment",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=cfg.app_name,
            namespace=namespace_name,
            annotations=cfg.skip_await_annotations
        ),
        spec=k8s.apps.v1.DeploymentSpecArgs(
            replicas=cfg.replicas,
            selector=k8s.meta.v1.LabelSelectorArgs(
                match_labels=cfg.app_labels
            ),
            template=k8s.core.v1.PodTemplateSpecArgs(
                metadata=k8s.meta.v1.ObjectMetaArgs(
                    labels=cfg.app_labels
                ),
                spec=k8s.core.v1.PodSpecArgs(
                    runtime_class_name=cfg.runtime_class,
                    containers=[
                        k8s.core.v1.ContainerArgs(
                            name=cfg.app_name,
                            image=image_name,
                            command=["/"],
                            resources=k8s.core.v1.ResourceRequirementsArgs(
                                requests=cfg.container_requests,
                                limits=cfg.container_limits
                            )
                        )
                    ]
                )
            )
        ),
        opts=pulumi.ResourceOptions(provider=provider, depends_on=depends_on)
    )

    return {
        "deployment": deployment,
        "deployment_name": deployment.metadata.name
    }


def expose_wasm_app(cfg, provider: k8s.Provider, namespace_name: 'pulumi.Output[str]',
                    deployment, depends_on: List[pulumi.Resource]) -> Dict[str, any]:
    """
    Front the deployment with a LoadBalancer service

    Args:
        cfg: Deployment configuration
        provider: Kubernetes provider for the AKS cluster
        namespace_name: Namespace of the deployment
        deployment: Deployment whose selector the service routes to
        depends_on: Resources that must exist first

    Returns:
        Dict with service resource and outputs
    """
    pulumi.log.info(f"Declaring LoadBalancer service {cfg.app_name} :{cfg.service_port} -> :{cfg.container_port}")

    # Selector is read back from the deployment so the two cannot drift
    selector = {"app": deployment.spec.selector.match_labels["app"]}

    service = k8s.core.v1.Service(
        f"{cfg.app_name}-service",
        metadata=k8s.meta.v1.ObjectMetaArgs(
            name=cfg.app_name,
            namespace=namespace_name,
            annotations=cfg.skip_await_annotations
        ),
        spec=k8s.core.v1.ServiceSpecArgs(
            type=k8s.core.v1.ServiceSpecType.LOAD_BALANCER,
            ports=[
                k8s.core.v1.ServicePortArgs(
                    name="http",
                    protocol="TCP",
                    port=cfg.service_port,
                    target_port=cfg.container_port
                )
            ],
            selector=selector
        ),
        opts=pulumi.ResourceOptions(provider=provider, depends_on=depends_on)
    )

    return {
        "service": service,
        "service_name": service.metadata.name,
        "selector": selector
    }
