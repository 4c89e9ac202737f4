"""PKCS#11 mechanism and key type identifiers.

Values are the ``CKM_*`` and ``CKK_*`` constants from the PKCS#11 v2.20
header (pkcs11t.h). Only the identifiers referenced by the algorithm catalog
or by the mechanism/function matrix (v2.20 s12, table 34) are listed.
"""

from enum import IntEnum


class KeyType(IntEnum):
    """Key types (CKK_*)."""
    RSA = 0x0000
    DSA = 0x0001
    DH = 0x0002
    EC = 0x0003
    X9_42_DH = 0x0004
    KEA = 0x0005
    GENERIC_SECRET = 0x0010
    RC2 = 0x0011
    RC4 = 0x0012
    DES = 0x0013
    DES2 = 0x0014
    DES3 = 0x0015
    CAST = 0x0016
    CAST3 = 0x0017
    CAST128 = 0x0018
    RC5 = 0x0019
    IDEA = 0x001A
    SKIPJACK = 0x001B
    BATON = 0x001C
    JUNIPER = 0x001D
    CDMF = 0x001E
    AES = 0x001F
    BLOWFISH = 0x0020
    TWOFISH = 0x0021


class Mechanism(IntEnum):
    """Mechanism types (CKM_*)."""

    # RSA
    RSA_PKCS_KEY_PAIR_GEN = 0x0000
    RSA_PKCS = 0x0001
    RSA_9796 = 0x0002
    RSA_X_509 = 0x0003
    MD2_RSA_PKCS = 0x0004
    MD5_RSA_PKCS = 0x0005
    SHA1_RSA_PKCS = 0x0006
    RIPEMD128_RSA_PKCS = 0x0007
    RIPEMD160_RSA_PKCS = 0x0008
    RSA_PKCS_OAEP = 0x0009
    RSA_X9_31_KEY_PAIR_GEN = 0x000A
    RSA_X9_31 = 0x000B
    SHA1_RSA_X9_31 = 0x000C
    RSA_PKCS_PSS = 0x000D
    SHA1_RSA_PKCS_PSS = 0x000E

    # DSA / Diffie-Hellman
    DSA_KEY_PAIR_GEN = 0x0010
    DSA = 0x0011
    DSA_SHA1 = 0x0012
    DH_PKCS_KEY_PAIR_GEN = 0x0020
    DH_PKCS_DERIVE = 0x0021
    X9_42_DH_KEY_PAIR_GEN = 0x0030
    X9_42_DH_DERIVE = 0x0031
    X9_42_DH_HYBRID_DERIVE = 0x0032
    X9_42_MQV_DERIVE = 0x0033

    SHA256_RSA_PKCS = 0x0040
    SHA384_RSA_PKCS = 0x0041
    SHA512_RSA_PKCS = 0x0042
    SHA256_RSA_PKCS_PSS = 0x0043
    SHA384_RSA_PKCS_PSS = 0x0044
    SHA512_RSA_PKCS_PSS = 0x0045

    # RC2 / RC4
    RC2_KEY_GEN = 0x0100
    RC2_ECB = 0x0101
    RC2_CBC = 0x0102
    RC2_MAC = 0x0103
    RC2_MAC_GENERAL = 0x0104
    RC2_CBC_PAD = 0x0105
    RC4_KEY_GEN = 0x0110
    RC4 = 0x0111

    # DES / 3DES / CDMF
    DES_KEY_GEN = 0x0120
    DES_ECB = 0x0121
    DES_CBC = 0x0122
    DES_MAC = 0x0123
    DES_MAC_GENERAL = 0x0124
    DES_CBC_PAD = 0x0125
    DES2_KEY_GEN = 0x0130
    DES3_KEY_GEN = 0x0131
    DES3_ECB = 0x0132
    DES3_CBC = 0x0133
    DES3_MAC = 0x0134
    DES3_MAC_GENERAL = 0x0135
    DES3_CBC_PAD = 0x0136
    CDMF_KEY_GEN = 0x0140
    CDMF_ECB = 0x0141
    CDMF_CBC = 0x0142
    CDMF_MAC = 0x0143
    CDMF_MAC_GENERAL = 0x0144
    CDMF_CBC_PAD = 0x0145
    DES_OFB64 = 0x0150
    DES_OFB8 = 0x0151
    DES_CFB64 = 0x0152
    DES_CFB8 = 0x0153

    # Digests and HMACs
    MD2 = 0x0200
    MD2_HMAC = 0x0201
    MD2_HMAC_GENERAL = 0x0202
    MD5 = 0x0210
    MD5_HMAC = 0x0211
    MD5_HMAC_GENERAL = 0x0212
    SHA_1 = 0x0220
    SHA_1_HMAC = 0x0221
    SHA_1_HMAC_GENERAL = 0x0222
    RIPEMD128 = 0x0230
    RIPEMD128_HMAC = 0x0231
    RIPEMD128_HMAC_GENERAL = 0x0232
    RIPEMD160 = 0x0240
    RIPEMD160_HMAC = 0x0241
    RIPEMD160_HMAC_GENERAL = 0x0242
    SHA256 = 0x0250
    SHA256_HMAC = 0x0251
    SHA256_HMAC_GENERAL = 0x0252
    SHA384 = 0x0260
    SHA384_HMAC = 0x0261
    SHA384_HMAC_GENERAL = 0x0262
    SHA512 = 0x0270
    SHA512_HMAC = 0x0271
    SHA512_HMAC_GENERAL = 0x0272

    # CAST family / RC5 / IDEA
    CAST_KEY_GEN = 0x0300
    CAST_ECB = 0x0301
    CAST_CBC = 0x0302
    CAST_MAC = 0x0303
    CAST_MAC_GENERAL = 0x0304
    CAST_CBC_PAD = 0x0305
    CAST3_KEY_GEN = 0x0310
    CAST3_ECB = 0x0311
    CAST3_CBC = 0x0312
    CAST3_MAC = 0x0313
    CAST3_MAC_GENERAL = 0x0314
    CAST3_CBC_PAD = 0x0315
    CAST128_KEY_GEN = 0x0320
    CAST128_ECB = 0x0321
    CAST128_CBC = 0x0322
    CAST128_MAC = 0x0323
    CAST128_MAC_GENERAL = 0x0324
    CAST128_CBC_PAD = 0x0325
    RC5_KEY_GEN = 0x0330
    RC5_ECB = 0x0331
    RC5_CBC = 0x0332
    RC5_MAC = 0x0333
    RC5_MAC_GENERAL = 0x0334
    RC5_CBC_PAD = 0x0335
    IDEA_KEY_GEN = 0x0340
    IDEA_ECB = 0x0341
    IDEA_CBC = 0x0342
    IDEA_MAC = 0x0343
    IDEA_MAC_GENERAL = 0x0344
    IDEA_CBC_PAD = 0x0345

    # Generic secret keys and key manipulation
    GENERIC_SECRET_KEY_GEN = 0x0350
    CONCATENATE_BASE_AND_KEY = 0x0360
    CONCATENATE_BASE_AND_DATA = 0x0362
    CONCATENATE_DATA_AND_BASE = 0x0363
    XOR_BASE_AND_DATA = 0x0364
    EXTRACT_KEY_FROM_KEY = 0x0365

    # SSL / TLS
    SSL3_PRE_MASTER_KEY_GEN = 0x0370
    SSL3_MASTER_KEY_DERIVE = 0x0371
    SSL3_KEY_AND_MAC_DERIVE = 0x0372
    SSL3_MASTER_KEY_DERIVE_DH = 0x0373
    TLS_PRE_MASTER_KEY_GEN = 0x0374
    TLS_MASTER_KEY_DERIVE = 0x0375
    TLS_KEY_AND_MAC_DERIVE = 0x0376
    TLS_MASTER_KEY_DERIVE_DH = 0x0377
    TLS_PRF = 0x0378
    SSL3_MD5_MAC = 0x0380
    SSL3_SHA1_MAC = 0x0381

    # Hash-based key derivation
    MD5_KEY_DERIVATION = 0x0390
    MD2_KEY_DERIVATION = 0x0391
    SHA1_KEY_DERIVATION = 0x0392
    SHA256_KEY_DERIVATION = 0x0393
    SHA384_KEY_DERIVATION = 0x0394
    SHA512_KEY_DERIVATION = 0x0395

    # Password-based encryption / authentication
    PBE_MD2_DES_CBC = 0x03A0
    PBE_MD5_DES_CBC = 0x03A1
    PBE_MD5_CAST_CBC = 0x03A2
    PBE_MD5_CAST3_CBC = 0x03A3
    PBE_MD5_CAST128_CBC = 0x03A4
    PBE_SHA1_CAST128_CBC = 0x03A5
    PBE_SHA1_RC4_128 = 0x03A6
    PBE_SHA1_RC4_40 = 0x03A7
    PBE_SHA1_DES3_EDE_CBC = 0x03A8
    PBE_SHA1_DES2_EDE_CBC = 0x03A9
    PBE_SHA1_RC2_128_CBC = 0x03AA
    PBE_SHA1_RC2_40_CBC = 0x03AB
    PKCS5_PBKD2 = 0x03B0
    PBA_SHA1_WITH_SHA1_HMAC = 0x03C0

    # WTLS
    WTLS_PRE_MASTER_KEY_GEN = 0x03D0
    WTLS_MASTER_KEY_DERIVE = 0x03D1
    WTLS_MASTER_KEY_DERIVE_DH_ECC = 0x03D2
    WTLS_PRF = 0x03D3
    WTLS_SERVER_KEY_AND_MAC_DERIVE = 0x03D4
    WTLS_CLIENT_KEY_AND_MAC_DERIVE = 0x03D5

    KEY_WRAP_LYNKS = 0x0400
    KEY_WRAP_SET_OAEP = 0x0401
    CMS_SIG = 0x0500

    # Fortezza / SKIPJACK / KEA / BATON
    SKIPJACK_KEY_GEN = 0x1000
    SKIPJACK_ECB64 = 0x1001
    SKIPJACK_CBC64 = 0x1002
    SKIPJACK_OFB64 = 0x1003
    SKIPJACK_CFB64 = 0x1004
    SKIPJACK_CFB32 = 0x1005
    SKIPJACK_CFB16 = 0x1006
    SKIPJACK_CFB8 = 0x1007
    SKIPJACK_WRAP = 0x1008
    SKIPJACK_PRIVATE_WRAP = 0x1009
    SKIPJACK_RELAYX = 0x100A
    KEA_KEY_PAIR_GEN = 0x1010
    KEA_KEY_DERIVE = 0x1011
    FORTEZZA_TIMESTAMP = 0x1020
    BATON_KEY_GEN = 0x1030
    BATON_ECB128 = 0x1031
    BATON_ECB96 = 0x1032
    BATON_CBC128 = 0x1033
    BATON_COUNTER = 0x1034
    BATON_SHUFFLE = 0x1035
    BATON_WRAP = 0x1036

    # Elliptic curve
    EC_KEY_PAIR_GEN = 0x1040
    ECDSA = 0x1041
    ECDSA_SHA1 = 0x1042
    ECDH1_DERIVE = 0x1050
    ECDH1_COFACTOR_DERIVE = 0x1051
    ECMQV_DERIVE = 0x1052

    # JUNIPER
    JUNIPER_KEY_GEN = 0x1060
    JUNIPER_ECB128 = 0x1061
    JUNIPER_CBC128 = 0x1062
    JUNIPER_COUNTER = 0x1063
    JUNIPER_SHUFFLE = 0x1064
    JUNIPER_WRAP = 0x1065
    FASTHASH = 0x1070

    # AES
    AES_KEY_GEN = 0x1080
    AES_ECB = 0x1081
    AES_CBC = 0x1082
    AES_MAC = 0x1083
    AES_MAC_GENERAL = 0x1084
    AES_CBC_PAD = 0x1085

    BLOWFISH_KEY_GEN = 0x1090
    BLOWFISH_CBC = 0x1091
    TWOFISH_KEY_GEN = 0x1092
    TWOFISH_CBC = 0x1093

    # Derivation by encrypting data
    DES_ECB_ENCRYPT_DATA = 0x1100
    DES_CBC_ENCRYPT_DATA = 0x1101
    DES3_ECB_ENCRYPT_DATA = 0x1102
    DES3_CBC_ENCRYPT_DATA = 0x1103
    AES_ECB_ENCRYPT_DATA = 0x1104
    AES_CBC_ENCRYPT_DATA = 0x1105

    # Domain parameter generation
    DSA_PARAMETER_GEN = 0x2000
    DH_PKCS_PARAMETER_GEN = 0x2001
    X9_42_DH_PARAMETER_GEN = 0x2002

    @property
    def ckm_name(self) -> str:
        """Header-style name, e.g. ``CKM_AES_CBC``."""
        return f"CKM_{self.name}"


def to_mechanism(value: "Mechanism | int") -> Mechanism | None:
    """Coerce a raw CK_MECHANISM_TYPE to a ``Mechanism``, or None if unknown."""
    if isinstance(value, Mechanism):
        return value
    try:
        return Mechanism(value)
    except ValueError:
        return None
