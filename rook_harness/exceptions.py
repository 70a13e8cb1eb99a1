class TestContextError(Exception):
    __test__ = False

    def __init__(self, field, value, reason):
        self.field = field
        self.value = value
        self.reason = reason

    def __str__(self):
        return f"Invalid test context {self.field}={self.value!r}: {self.reason}"


class InstallationError(Exception):
    def __init__(self, namespace, err=None):
        self.namespace = namespace
        self.err = f"Error: {err}" if err else ""

    def __str__(self):
        return f"Rook installation in namespace {self.namespace} failed. {self.err}"


class ClusterNotHealthyError(Exception):
    def __init__(self, health, details=None):
        self.health = health
        self.details = details

    def __str__(self):
        details = f", details: {self.details}" if self.details else ""
        return f"Cluster is not healthy, health: {self.health}{details}"


class ClusterHealthTimeoutError(Exception):
    def __init__(self, attempts, last_error):
        self.attempts = attempts
        self.last_error = last_error

    def __str__(self):
        return (
            f"Cluster did not become healthy after {self.attempts} attempts. "
            f"Last error: {self.last_error}"
        )


class PodExpectationError(Exception):
    def __init__(self, expectations):
        self.expectations = expectations

    def __str__(self):
        return "Unmet pod expectations: " + ", ".join(
            expectation.description for expectation in self.expectations
        )


class ToolboxPodNotFoundError(Exception):
    def __init__(self, prefix, namespace):
        self.prefix = prefix
        self.namespace = namespace

    def __str__(self):
        return f"Toolbox pod with prefix {self.prefix} not found in namespace {self.namespace}"


class CollaboratorImportError(Exception):
    def __init__(self, path, err=None):
        self.path = path
        self.err = f"Error: {err}" if err else ""

    def __str__(self):
        return f"Cannot import {self.path}. {self.err}"
