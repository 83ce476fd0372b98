"""
Unit tests for the cluster functions
"""

import unittest
from unittest.mock import patch
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wasm_aks.cluster import create_managed_cluster, create_wasm_agent_pool
from test_config import make_config


@patch("pulumi.log")
class TestClusterFunctions(unittest.TestCase):

    def test_managed_cluster(self, _log):
        cfg = make_config()
        with patch("wasm_aks.cluster.containerservice") as mock_cs:
            result = create_managed_cluster(cfg, "rg-name")

            args, kwargs = mock_cs.ManagedCluster.call_args
            self.assertEqual(args[0], "wasm-aks-cluster")
            self.assertEqual(kwargs["resource_group_name"], "rg-name")
            self.assertEqual(kwargs["kubernetes_version"], "1.25.5")
            self.assertEqual(kwargs["resource_name_"], "wasm-aks-cluster")
            self.assertEqual(kwargs["dns_prefix"], "wasm-aks-cluster")
            mock_cs.ManagedClusterIdentityArgs.assert_called_once_with(
                type=mock_cs.ResourceIdentityType.SYSTEM_ASSIGNED)
            mock_cs.ManagedClusterAgentPoolProfileArgs.assert_called_once_with(
                name="agentpool",
                mode="System",
                os_disk_size_gb=30,
                os_type="Linux",
                count=1,
                vm_size="Standard_B4ms",
            )

            cluster = mock_cs.ManagedCluster.return_value
            self.assertIs(result["cluster"], cluster)
            self.assertIs(result["cluster_name"], cluster.name)
            self.assertIs(result["identity_profile"], cluster.identity_profile)

    def test_wasm_agent_pool_sets_wasi_runtime(self, _log):
        cfg = make_config()
        with patch("wasm_aks.cluster.containerservice") as mock_cs:
            result = create_wasm_agent_pool(cfg, "rg-name", "cluster-name")

            kwargs = mock_cs.AgentPool.call_args.kwargs
            self.assertIn("workload_runtime", kwargs)
            self.assertIs(kwargs["workload_runtime"], mock_cs.WorkloadRuntime.WASM_WASI)
            self.assertEqual(kwargs["agent_pool_name"], "wasmpool")
            self.assertEqual(kwargs["resource_group_name"], "rg-name")
            self.assertEqual(kwargs["resource_name_"], "cluster-name")
            self.assertEqual(kwargs["count"], 1)
            self.assertEqual(kwargs["vm_size"], "Standard_B4ms")
            self.assertEqual(kwargs["os_type"], "Linux")
            self.assertIs(result["agent_pool_name"], mock_cs.AgentPool.return_value.name)

    def test_wasi_runtime_value(self, _log):
        # The real enum must carry the AKS wire value
        from pulumi_azure_native import containerservice
        self.assertEqual(containerservice.WorkloadRuntime.WASM_WASI, "WasmWasi")


if __name__ == "__main__":
    unittest.main(verbosity=2)
