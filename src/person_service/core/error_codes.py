"""Stable error codes returned in the ``errorCode`` field of error bodies."""

# Person attributes - validation
PA_INVALID_PERSON_ID = "PA_001_INVALID_PERSON_ID"
PA_INVALID_ATTRIBUTE_ID = "PA_002_INVALID_ATTRIBUTE_ID"
PA_INVALID_REQUEST_BODY = "PA_003_INVALID_REQUEST_BODY"
PA_MISSING_KEY = "PA_004_MISSING_KEY"
PA_MISSING_META = "PA_005_MISSING_META"
PA_INVALID_ATTRIBUTE_ID_FORMAT = "PA_006_INVALID_ATTRIBUTE_ID_FORMAT"

# Person attributes - not found
PA_PERSON_NOT_FOUND = "PA_101_PERSON_NOT_FOUND"
PA_ATTRIBUTE_NOT_FOUND = "PA_102_ATTRIBUTE_NOT_FOUND"

# Person attributes - storage
PA_FAILED_VERIFY_PERSON = "PA_201_FAILED_VERIFY_PERSON"
PA_FAILED_CREATE_ATTRIBUTE = "PA_202_FAILED_CREATE_ATTRIBUTE"
PA_FAILED_RETRIEVE_ATTRIBUTE = "PA_203_FAILED_RETRIEVE_ATTRIBUTE"
PA_FAILED_RETRIEVE_ATTRIBUTES = "PA_204_FAILED_RETRIEVE_ATTRIBUTES"
PA_FAILED_UPDATE_ATTRIBUTE = "PA_205_FAILED_UPDATE_ATTRIBUTE"
PA_FAILED_RETRIEVE_UPDATED = "PA_206_FAILED_RETRIEVE_UPDATED"
PA_FAILED_DELETE_ATTRIBUTE = "PA_207_FAILED_DELETE_ATTRIBUTE"
PA_FAILED_UPDATE_KEY = "PA_208_FAILED_UPDATE_KEY"

# Person attributes - audit
PA_FAILED_AUDIT_LOG = "PA_301_FAILED_AUDIT_LOG"

# Key-value
KV_INVALID_REQUEST_BODY = "KV_001_INVALID_REQUEST_BODY"
KV_MISSING_KEY_OR_VALUE = "KV_002_MISSING_KEY_OR_VALUE"
KV_MISSING_KEY_PARAM = "KV_003_MISSING_KEY_PARAM"
KV_KEY_NOT_FOUND = "KV_101_KEY_NOT_FOUND"
KV_FAILED_SET_VALUE = "KV_201_FAILED_SET_VALUE"
KV_FAILED_RETRIEVE_VALUE = "KV_202_FAILED_RETRIEVE_VALUE"
KV_FAILED_DELETE_VALUE = "KV_203_FAILED_DELETE_VALUE"

# API key gate
API_MISSING_API_KEY = "API_001_MISSING_API_KEY"
API_INVALID_API_KEY_FORMAT = "API_002_INVALID_API_KEY_FORMAT"
API_KEYS_NOT_CONFIGURED = "API_003_KEYS_NOT_CONFIGURED"
API_INVALID_API_KEY = "API_004_INVALID_API_KEY"

# Health check
HC_HEALTH_CHECK_FAILED = "HC_001_HEALTH_CHECK_FAILED"

# Startup / shutdown (logged only)
DB_URL_NOT_SET = "DB_001_URL_NOT_SET"
DB_INVALID_PORT = "DB_002_INVALID_PORT"
DB_PING_FAILED = "DB_005_PING_FAILED"
DB_FAILED_SHUTDOWN = "DB_007_FAILED_SHUTDOWN_SERVER"

# Framework-level fallbacks
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
