from dataclasses import dataclass

from rook_harness.constants import ROOK_SYSTEM_NAMESPACE, StoreType
from rook_harness.exceptions import TestContextError


def _to_bool(value):
    # --tc overrides arrive as strings
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


@dataclass(frozen=True)
class TestContext:
    """
    Read-only configuration of one deploy test run.

    Args:
        cluster_namespace (str): Namespace the storage cluster is deployed to.
        store_type (str): OSD store type, one of StoreType.ALL.
        data_dir_host_path (str): Host path for persisted data, empty for none.
        helm_installed (bool): Install the operator with helm instead of manifests.
        use_devices (bool): Let OSDs consume raw devices on the nodes.
        mons (int): Expected number of monitors.
        operator_namespace (str): Namespace of the operator and agent pods.
    """

    __test__ = False

    cluster_namespace: str
    store_type: str = StoreType.BLUESTORE
    data_dir_host_path: str = ""
    helm_installed: bool = False
    use_devices: bool = False
    mons: int = 1
    operator_namespace: str = ROOK_SYSTEM_NAMESPACE

    def __post_init__(self):
        if not self.cluster_namespace:
            raise TestContextError(
                field="cluster_namespace",
                value=self.cluster_namespace,
                reason="namespace is required",
            )
        if not self.operator_namespace:
            raise TestContextError(
                field="operator_namespace",
                value=self.operator_namespace,
                reason="namespace is required",
            )
        if self.store_type not in StoreType.ALL:
            raise TestContextError(
                field="store_type",
                value=self.store_type,
                reason=f"must be one of {StoreType.ALL}",
            )
        if isinstance(self.mons, bool) or not isinstance(self.mons, int):
            raise TestContextError(
                field="mons", value=self.mons, reason="must be an integer"
            )
        if self.mons < 1:
            raise TestContextError(
                field="mons", value=self.mons, reason="at least one mon is required"
            )

    @classmethod
    def build(
        cls,
        *,
        cluster_namespace,
        store_type=StoreType.BLUESTORE,
        data_dir_host_path="",
        helm_installed=False,
        use_devices=False,
        mons=1,
        operator_namespace=ROOK_SYSTEM_NAMESPACE,
    ):
        return cls(
            cluster_namespace=cluster_namespace,
            store_type=store_type,
            data_dir_host_path=data_dir_host_path or "",
            helm_installed=bool(helm_installed),
            use_devices=bool(use_devices),
            mons=mons,
            operator_namespace=operator_namespace,
        )

    @classmethod
    def from_config(cls, config, **overrides):
        """
        Build a context from a py_config like mapping.

        Args:
            config (dict): Mapping with the global_config keys.
            overrides: Values that take precedence over the mapping.

        Returns:
            TestContext: The context.
        """
        params = {
            "cluster_namespace": config.get("cluster_namespace"),
            "store_type": config.get("store_type", StoreType.BLUESTORE),
            "data_dir_host_path": config.get("data_dir_host_path", ""),
            "helm_installed": _to_bool(value=config.get("helm_installed", False)),
            "use_devices": _to_bool(value=config.get("use_devices", False)),
            "mons": int(config.get("mons", 1)),
            "operator_namespace": config.get(
                "operator_namespace", ROOK_SYSTEM_NAMESPACE
            ),
        }
        params.update(overrides)
        return cls.build(**params)
