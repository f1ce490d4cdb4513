"""常量定义：集中维护状态码与扫描相关的固定取值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_CREATED = 201
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

ENTRY_TYPE_FILE = "file"
ENTRY_TYPE_DIRECTORY = "directory"

ITEM_TYPE_FILE = "file"

STATUS_INDEXED = "indexed"
STATUS_UPDATED = "updated"
STATUS_ERROR = "error"

MOVE_STATUS_MOVED = "moved"
MOVE_STATUS_NOT_FOUND = "not_found"
MOVE_STATUS_ERROR = "error"

DUPLICATE_POLICY_ALL = "all"
DUPLICATE_POLICY_KEEP_ORIGINAL = "keep_original"
