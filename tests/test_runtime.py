"""
Wiring tests against the Pulumi mock engine
Real SDK resources are declared; only the engine and provider calls are faked,
so the applies in the topology run on resolved values
"""

import base64
import unittest
import sys
import os

import pulumi

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wasm_aks.config import ACR_PULL_ROLE_DEFINITION_ID
from wasm_aks.topology import create_topology
from test_config import make_config

KUBECONFIG = "apiVersion: v1\nkind: Config\ncurrent-context: wasm-aks-cluster\n"


def encode(text):
    return base64.b64encode(text.encode()).decode()


class TopologyMocks(pulumi.runtime.Mocks):
    """Echo resource inputs back and answer the three lookups the stack makes"""

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        outputs.setdefault("name", args.name)
        if args.typ.endswith(":ManagedCluster"):
            outputs["identityProfile"] = {
                "kubeletidentity": {
                    "clientId": "kubelet-client",
                    "objectId": "kubelet-oid",
                    "resourceId": "/identities/kubelet",
                },
                "aciconnector": {
                    "clientId": "connector-client",
                    "objectId": "control-plane-oid",
                    "resourceId": "/identities/connector",
                },
            }
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        if args.token.endswith(":listManagedClusterUserCredentials"):
            return {"kubeconfigs": [
                {"name": "clusterUser", "value": encode(KUBECONFIG)},
                {"name": "clusterUserSecondary", "value": encode("ignored")},
            ]}
        if args.token.endswith(":listRegistryCredentials"):
            return {"username": "wasmaksregistry",
                    "passwords": [{"name": "password", "value": "registry-secret"}]}
        if args.token.endswith(":getRoleDefinition"):
            return {"id": f"/providers/Microsoft.Authorization/roleDefinitions/{ACR_PULL_ROLE_DEFINITION_ID}",
                    "name": ACR_PULL_ROLE_DEFINITION_ID}
        return {}


class TestTopologyRuntime(unittest.TestCase):
    """Test values flow between resources once outputs resolve"""

    def setUp(self):
        pulumi.runtime.set_mocks(TopologyMocks(), preview=False)

    @pulumi.runtime.test
    def test_resolved_wiring(self):
        topology = create_topology(make_config())
        role_assignment = topology["role_assignment"]["role_assignment"]
        deployment = topology["deployment"]["deployment"]
        service = topology["service"]["service"]

        def check(values):
            kubeconfig, principal_id, role_definition_id, match_labels, selector, image_name = values
            self.assertEqual(kubeconfig, KUBECONFIG)
            self.assertEqual(principal_id, "kubelet-oid")
            self.assertTrue(role_definition_id.endswith(ACR_PULL_ROLE_DEFINITION_ID))
            self.assertEqual(match_labels, {"app": "wasm-demo"})
            self.assertEqual(selector, {"app": "wasm-demo"})
            self.assertEqual(selector, match_labels)
            self.assertEqual(image_name, "wasmaksregistry.azurecr.io/aks-wasm-spin-demo:latest")

        return pulumi.Output.all(
            topology["kubeconfig"],
            role_assignment.principal_id,
            role_assignment.role_definition_id,
            deployment.spec.selector.match_labels,
            service.spec.selector,
            topology["image"]["image_name"],
        ).apply(check)

    @pulumi.runtime.test
    def test_registry_credentials_resolve(self):
        topology = create_topology(make_config())
        credentials = topology["registry_credentials"]

        def check(values):
            self.assertEqual(values, ["wasmaksregistry", "registry-secret"])

        return pulumi.Output.all(credentials["username"], credentials["password"]).apply(check)


if __name__ == "__main__":
    unittest.main(verbosity=2)
