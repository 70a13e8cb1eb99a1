# Rook roles, matched against the pods "app" label
ROOK_OPERATOR = "rook-operator"
ROOK_AGENT = "rook-agent"
ROOK_API = "rook-api"
ROOK_CEPH_MGR = "rook-ceph-mgr"
ROOK_CEPH_OSD = "rook-ceph-osd"
ROOK_CEPH_MON = "rook-ceph-mon"
ROOK_TOOLS = "rook-tools"
POD_ROLE_LABEL = "app"


# Namespaces
DEFAULT_NAMESPACE = "default"
ROOK_SYSTEM_NAMESPACE = "rook-system"


# Store types
class StoreType:
    BLUESTORE = "bluestore"
    FILESTORE = "filestore"

    ALL = (BLUESTORE, FILESTORE)


# Ceph health
class CephHealth:
    OK = "HEALTH_OK"
    WARN = "HEALTH_WARN"
    ERR = "HEALTH_ERR"


# Health polling
RETRY_LOOP = 50
RETRY_INTERVAL = 5

# Timeouts
TIMEOUT_5MIN = 5 * 60

# Logs
DEFAULT_LOG_COLLECTOR_DIR = "tests-collected-info"
DEFAULT_PYTEST_LOG_FILE = "pytest-tests.log"
