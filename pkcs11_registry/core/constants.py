"""Process-wide constants used when talking to a token.

PIN values match the defaults the test token is initialized with. The
boolean sentinels are the CK_BBOOL encodings placed in attribute templates.
"""

# PINs
USER_PIN = "useruser"
RESET_USER_PIN = "12345678"
SO_PIN = "sososo"
RESET_SO_PIN = "87654321"

# Label given to every object the tests create
LABEL = "pkcs11test object"
LABEL_LEN = len(LABEL)

# CK_BBOOL
CK_FALSE = 0
CK_TRUE = 1
CK_FALSE_BYTES = bytes([CK_FALSE])
CK_TRUE_BYTES = bytes([CK_TRUE])

# Token labels are CK_UTF8CHAR[32], blank padded
TOKEN_LABEL_SIZE = 32

# CipherInfo.iv_length when the mode takes no IV
IV_NOT_APPLICABLE = -1
