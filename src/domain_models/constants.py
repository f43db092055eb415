DEFAULT_PARENT_FIELD = "parentId"
DEFAULT_NAME_FIELD = "name"
DEFAULT_CHILDREN_FIELD = "_children"

# Construction error messages
ERROR_MSG_EMPTY_INPUT = "There is no data."
ERROR_MSG_NOT_A_MAPPING = "The data is not a mapping (got {})."
ERROR_MSG_MISSING_PARENT_FIELD = "Not all items in the data have a parent defined (failure at ID {})."
ERROR_MSG_DANGLING_PARENT = "Not all items in the data have a parent which exists (failure at ID {})."
ERROR_MSG_INVALID_ROOT_COUNT = "There must be a single root node, but {} were found."
ERROR_MSG_UNKNOWN_ROOT = "The requested root node {} does not exist in the data."
ERROR_MSG_CYCLIC_ANCESTRY = "The ancestry of node {} is cyclic below the root."

# Log messages
LOG_MSG_BUILDING = "Building hierarchy from {} records."
LOG_MSG_ROOT_RESOLVED = "Resolved root node: {}"
LOG_MSG_BUILT = "Hierarchy built: {} of {} records reachable from root {}."
LOG_MSG_UNREACHABLE = "{} records are not reachable from root {} and were left out of the tree."
