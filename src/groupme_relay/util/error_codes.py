# Validation (1000-1999)
MALFORMED_ATTACHMENT = 1001
MALFORMED_MEMBER = 1002
MALFORMED_GROUP = 1003
MALFORMED_CALLBACK = 1004

# External Service (5000-5999)
UNEXPECTED_STATUS_CODE = 5001
UNEXPECTED_META_CODE = 5002
MALFORMED_API_RESPONSE = 5003
