"""
Errors raised while assembling the topology
Provider and invoke failures are not wrapped; they reach the engine as-is
"""


class TopologyError(Exception):
    """Base class for topology declaration failures"""


class ConfigError(TopologyError):
    """Stack configuration that cannot produce a valid topology"""


class KubeconfigDecodeError(TopologyError):
    """Cluster user credentials missing or not decodable"""


class MissingIdentityError(TopologyError):
    """Managed cluster reports no kubelet identity"""
