import importlib
import logging
import re

import kubernetes
from ocp_resources.pod import Pod
from openshift.dynamic import DynamicClient

from rook_harness.constants import POD_ROLE_LABEL
from rook_harness.exceptions import CollaboratorImportError


LOGGER = logging.getLogger(__name__)


def get_admin_client():
    return DynamicClient(client=kubernetes.config.new_client_from_config())


def get_pods_by_role(dyn_client, role, namespace):
    """
    Args:
        dyn_client (DynamicClient): Client to use.
        role (str): Value of the pods "app" label.
        namespace (str): Namespace name.

    Returns:
        list: Pods of the role, empty list if none found.
    """
    return list(
        Pod.get(
            dyn_client=dyn_client,
            namespace=namespace,
            label_selector=f"{POD_ROLE_LABEL}={role}",
        )
    )


def get_pod_by_name_prefix(dyn_client, pod_prefix, namespace):
    """
    Args:
        dyn_client (DynamicClient): Client to use.
        pod_prefix (str): str or regex pattern.
        namespace (str): Namespace name.

    Returns:
        Pod: The first matching pod, None if no pod matches.
    """
    for pod in Pod.get(dyn_client=dyn_client, namespace=namespace):
        if re.match(pod_prefix, pod.name):
            return pod


def import_from_path(path):
    """
    Import an object by its dotted path, e.g. "my_installers.helm.HelmInstaller".

    Args:
        path (str): "<module>.<attribute>" path.

    Returns:
        object: The imported attribute.

    Raises:
        CollaboratorImportError: If the module or the attribute cannot be found.
    """
    if not path or "." not in path:
        raise CollaboratorImportError(path=path, err="expected <module>.<attribute>")

    module_name, attr_name = path.rsplit(".", 1)
    try:
        module = importlib.import_module(name=module_name)
    except ImportError as exp:
        raise CollaboratorImportError(path=path, err=exp) from exp

    try:
        return getattr(module, attr_name)
    except AttributeError as exp:
        raise CollaboratorImportError(path=path, err=exp) from exp
