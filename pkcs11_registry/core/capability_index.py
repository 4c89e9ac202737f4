"""Mechanism capability index.

Classifies every mechanism in PKCS#11 v2.20 s12, table 34 ("Mechanisms vs.
Functions") into the functions the standard allows it for. The tables below
mirror that matrix row by row.

Membership is many-to-many: CKM_AES_CBC is valid for both encrypt/decrypt
and wrap/unwrap, CKM_RSA_PKCS for four functions. Each capability therefore
owns an independent set, and sign/verify and sign/verify-recover are kept
separate without assuming either contains the other.
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from pkcs11_registry.core.mechanisms import Mechanism, to_mechanism


class Capability(str, Enum):
    """Function categories of the mechanism/function matrix."""
    ENCRYPT_DECRYPT = "encrypt_decrypt"
    SIGN_VERIFY = "sign_verify"
    SIGN_VERIFY_RECOVER = "sign_verify_recover"
    DIGEST = "digest"
    GENERATE = "generate"  # key, key pair and domain parameter generation
    WRAP_UNWRAP = "wrap_unwrap"
    DERIVE = "derive"


M = Mechanism

ENCRYPT_DECRYPT_MECHANISMS = frozenset([
    M.RSA_PKCS,
    M.RSA_PKCS_OAEP,
    M.RSA_X_509,
    M.RC2_ECB,
    M.RC2_CBC,
    M.RC2_CBC_PAD,
    M.RC4,
    M.RC5_ECB,
    M.RC5_CBC,
    M.RC5_CBC_PAD,
    M.AES_ECB,
    M.AES_CBC,
    M.AES_CBC_PAD,
    M.DES_ECB,
    M.DES_CBC,
    M.DES_CBC_PAD,
    M.DES3_ECB,
    M.DES3_CBC,
    M.DES3_CBC_PAD,
    M.CAST_ECB,
    M.CAST_CBC,
    M.CAST_CBC_PAD,
    M.CAST3_ECB,
    M.CAST3_CBC,
    M.CAST3_CBC_PAD,
    M.CAST128_ECB,
    M.CAST128_CBC,
    M.CAST128_CBC_PAD,
    M.IDEA_ECB,
    M.IDEA_CBC,
    M.IDEA_CBC_PAD,
    M.CDMF_ECB,
    M.CDMF_CBC,
    M.CDMF_CBC_PAD,
    M.SKIPJACK_ECB64,
    M.SKIPJACK_CBC64,
    M.SKIPJACK_OFB64,
    M.SKIPJACK_CFB64,
    M.SKIPJACK_CFB32,
    M.SKIPJACK_CFB16,
    M.SKIPJACK_CFB8,
    M.BATON_ECB128,
    M.BATON_ECB96,
    M.BATON_CBC128,
    M.BATON_COUNTER,
    M.BATON_SHUFFLE,
    M.JUNIPER_ECB128,
    M.JUNIPER_CBC128,
    M.JUNIPER_COUNTER,
    M.JUNIPER_SHUFFLE,
    M.BLOWFISH_CBC,
    M.TWOFISH_CBC,
])

SIGN_VERIFY_MECHANISMS = frozenset([
    M.RSA_PKCS,
    M.RSA_PKCS_PSS,
    M.RSA_9796,
    M.RSA_X_509,
    M.RSA_X9_31,
    M.MD2_RSA_PKCS,
    M.MD5_RSA_PKCS,
    M.SHA1_RSA_PKCS,
    M.SHA256_RSA_PKCS,
    M.SHA384_RSA_PKCS,
    M.SHA512_RSA_PKCS,
    M.RIPEMD128_RSA_PKCS,
    M.RIPEMD160_RSA_PKCS,
    M.SHA1_RSA_PKCS_PSS,
    M.SHA256_RSA_PKCS_PSS,
    M.SHA384_RSA_PKCS_PSS,
    M.SHA512_RSA_PKCS_PSS,
    M.SHA1_RSA_X9_31,
    M.DSA,
    M.DSA_SHA1,
    M.FORTEZZA_TIMESTAMP,
    M.ECDSA,
    M.ECDSA_SHA1,
    M.RC2_MAC_GENERAL,
    M.RC2_MAC,
    M.RC5_MAC_GENERAL,
    M.RC5_MAC,
    M.AES_MAC_GENERAL,
    M.AES_MAC,
    M.DES_MAC_GENERAL,
    M.DES_MAC,
    M.DES3_MAC_GENERAL,
    M.DES3_MAC,
    M.CAST_MAC_GENERAL,
    M.CAST_MAC,
    M.CAST3_MAC_GENERAL,
    M.CAST3_MAC,
    M.CAST128_MAC_GENERAL,
    M.CAST128_MAC,
    M.IDEA_MAC_GENERAL,
    M.IDEA_MAC,
    M.CDMF_MAC_GENERAL,
    M.CDMF_MAC,
    M.MD2_HMAC_GENERAL,
    M.MD2_HMAC,
    M.MD5_HMAC_GENERAL,
    M.MD5_HMAC,
    M.SHA_1_HMAC_GENERAL,
    M.SHA_1_HMAC,
    M.SHA256_HMAC_GENERAL,
    M.SHA256_HMAC,
    M.SHA384_HMAC_GENERAL,
    M.SHA384_HMAC,
    M.SHA512_HMAC_GENERAL,
    M.SHA512_HMAC,
    M.RIPEMD128_HMAC_GENERAL,
    M.RIPEMD128_HMAC,
    M.RIPEMD160_HMAC_GENERAL,
    M.RIPEMD160_HMAC,
    M.SSL3_MD5_MAC,
    M.SSL3_SHA1_MAC,
    M.CMS_SIG,
])

SIGN_VERIFY_RECOVER_MECHANISMS = frozenset([
    M.RSA_PKCS,
    M.RSA_9796,
    M.RSA_X_509,
    M.CMS_SIG,
])

DIGEST_MECHANISMS = frozenset([
    M.MD2,
    M.MD5,
    M.SHA_1,
    M.SHA256,
    M.SHA384,
    M.SHA512,
    M.RIPEMD128,
    M.RIPEMD160,
    M.FASTHASH,
])

GENERATE_MECHANISMS = frozenset([
    M.RSA_PKCS_KEY_PAIR_GEN,
    M.RSA_X9_31_KEY_PAIR_GEN,
    M.DSA_KEY_PAIR_GEN,
    M.DSA_PARAMETER_GEN,
    M.EC_KEY_PAIR_GEN,
    M.DH_PKCS_KEY_PAIR_GEN,
    M.DH_PKCS_PARAMETER_GEN,
    M.X9_42_DH_KEY_PAIR_GEN,
    M.X9_42_DH_PARAMETER_GEN,
    M.KEA_KEY_PAIR_GEN,
    M.GENERIC_SECRET_KEY_GEN,
    M.RC2_KEY_GEN,
    M.RC4_KEY_GEN,
    M.RC5_KEY_GEN,
    M.AES_KEY_GEN,
    M.DES_KEY_GEN,
    M.DES2_KEY_GEN,
    M.DES3_KEY_GEN,
    M.CAST_KEY_GEN,
    M.CAST3_KEY_GEN,
    M.CAST128_KEY_GEN,
    M.IDEA_KEY_GEN,
    M.CDMF_KEY_GEN,
    M.SKIPJACK_KEY_GEN,
    M.BATON_KEY_GEN,
    M.JUNIPER_KEY_GEN,
    M.PBE_MD2_DES_CBC,
    M.PBE_MD5_DES_CBC,
    M.PBE_MD5_CAST_CBC,
    M.PBE_MD5_CAST3_CBC,
    M.PBE_MD5_CAST128_CBC,
    M.PBE_SHA1_CAST128_CBC,
    M.PBE_SHA1_RC4_128,
    M.PBE_SHA1_RC4_40,
    M.PBE_SHA1_DES3_EDE_CBC,
    M.PBE_SHA1_DES2_EDE_CBC,
    M.PBE_SHA1_RC2_128_CBC,
    M.PBE_SHA1_RC2_40_CBC,
    M.PBA_SHA1_WITH_SHA1_HMAC,
    M.PKCS5_PBKD2,
    M.SSL3_PRE_MASTER_KEY_GEN,
    M.TLS_PRE_MASTER_KEY_GEN,
    M.WTLS_PRE_MASTER_KEY_GEN,
    M.BLOWFISH_KEY_GEN,
    M.TWOFISH_KEY_GEN,
])

WRAP_UNWRAP_MECHANISMS = frozenset([
    M.RSA_PKCS,
    M.RSA_PKCS_OAEP,
    M.RSA_X_509,
    M.RC2_ECB,
    M.RC2_CBC,
    M.RC2_CBC_PAD,
    M.RC5_ECB,
    M.RC5_CBC,
    M.RC5_CBC_PAD,
    M.AES_ECB,
    M.AES_CBC,
    M.AES_CBC_PAD,
    M.DES_ECB,
    M.DES_CBC,
    M.DES_CBC_PAD,
    M.DES3_ECB,
    M.DES3_CBC,
    M.DES3_CBC_PAD,
    M.CAST_ECB,
    M.CAST_CBC,
    M.CAST_CBC_PAD,
    M.CAST3_ECB,
    M.CAST3_CBC,
    M.CAST3_CBC_PAD,
    M.CAST128_ECB,
    M.CAST128_CBC,
    M.CAST128_CBC_PAD,
    M.IDEA_ECB,
    M.IDEA_CBC,
    M.IDEA_CBC_PAD,
    M.CDMF_ECB,
    M.CDMF_CBC,
    M.CDMF_CBC_PAD,
    M.SKIPJACK_WRAP,
    M.SKIPJACK_PRIVATE_WRAP,
    M.SKIPJACK_RELAYX,
    M.BATON_WRAP,
    M.JUNIPER_WRAP,
    M.KEY_WRAP_SET_OAEP,
    M.KEY_WRAP_LYNKS,
    M.DES_OFB64,
    M.DES_OFB8,
    M.DES_CFB64,
    M.DES_CFB8,
    M.BLOWFISH_CBC,
    M.TWOFISH_CBC,
])

DERIVE_MECHANISMS = frozenset([
    M.ECDH1_DERIVE,
    M.ECDH1_COFACTOR_DERIVE,
    M.ECMQV_DERIVE,
    M.DH_PKCS_DERIVE,
    M.X9_42_DH_DERIVE,
    M.X9_42_DH_HYBRID_DERIVE,
    M.X9_42_MQV_DERIVE,
    M.KEA_KEY_DERIVE,
    M.DES_ECB_ENCRYPT_DATA,
    M.DES_CBC_ENCRYPT_DATA,
    M.DES3_ECB_ENCRYPT_DATA,
    M.DES3_CBC_ENCRYPT_DATA,
    M.AES_ECB_ENCRYPT_DATA,
    M.AES_CBC_ENCRYPT_DATA,
    M.MD2_KEY_DERIVATION,
    M.MD5_KEY_DERIVATION,
    M.SHA1_KEY_DERIVATION,
    M.SHA256_KEY_DERIVATION,
    M.SHA384_KEY_DERIVATION,
    M.SHA512_KEY_DERIVATION,
    M.SSL3_MASTER_KEY_DERIVE,
    M.SSL3_MASTER_KEY_DERIVE_DH,
    M.SSL3_KEY_AND_MAC_DERIVE,
    M.TLS_MASTER_KEY_DERIVE,
    M.TLS_MASTER_KEY_DERIVE_DH,
    M.TLS_KEY_AND_MAC_DERIVE,
    M.TLS_PRF,
    M.WTLS_MASTER_KEY_DERIVE,
    M.WTLS_MASTER_KEY_DERIVE_DH_ECC,
    M.WTLS_SERVER_KEY_AND_MAC_DERIVE,
    M.WTLS_CLIENT_KEY_AND_MAC_DERIVE,
    M.WTLS_PRF,
    M.CONCATENATE_BASE_AND_KEY,
    M.CONCATENATE_BASE_AND_DATA,
    M.CONCATENATE_DATA_AND_BASE,
    M.XOR_BASE_AND_DATA,
    M.EXTRACT_KEY_FROM_KEY,
])

del M


def builtin_capability_tables() -> dict[Capability, frozenset[Mechanism]]:
    """The mechanism/function matrix as one set per capability."""
    return {
        Capability.ENCRYPT_DECRYPT: ENCRYPT_DECRYPT_MECHANISMS,
        Capability.SIGN_VERIFY: SIGN_VERIFY_MECHANISMS,
        Capability.SIGN_VERIFY_RECOVER: SIGN_VERIFY_RECOVER_MECHANISMS,
        Capability.DIGEST: DIGEST_MECHANISMS,
        Capability.GENERATE: GENERATE_MECHANISMS,
        Capability.WRAP_UNWRAP: WRAP_UNWRAP_MECHANISMS,
        Capability.DERIVE: DERIVE_MECHANISMS,
    }


class MechanismCapabilityIndex:
    """Answers which functions a mechanism may be used for."""

    def __init__(self, tables: Mapping[Capability, Iterable[Mechanism]]):
        self._tables = MappingProxyType({
            capability: frozenset(Mechanism(m) for m in tables.get(capability, ()))
            for capability in Capability
        })

    @classmethod
    def builtin(cls) -> "MechanismCapabilityIndex":
        return cls(builtin_capability_tables())

    def supports(self, mechanism: Mechanism | int, capability: Capability) -> bool:
        """Check whether ``mechanism`` is valid for ``capability``.

        Unknown mechanisms and unknown capabilities are simply unsupported.
        """
        mech = to_mechanism(mechanism)
        if mech is None:
            return False
        try:
            capability = Capability(capability)
        except ValueError:
            return False
        return mech in self._tables[capability]

    def mechanisms_for(self, capability: Capability) -> frozenset[Mechanism]:
        """The full set of mechanisms valid for ``capability``."""
        return self._tables[Capability(capability)]

    def capabilities_of(self, mechanism: Mechanism | int) -> frozenset[Capability]:
        """Every capability ``mechanism`` belongs to (empty if none)."""
        mech = to_mechanism(mechanism)
        if mech is None:
            return frozenset()
        return frozenset(
            capability for capability, members in self._tables.items()
            if mech in members
        )

    def all_mechanisms(self) -> frozenset[Mechanism]:
        """Every mechanism referenced by any capability."""
        return frozenset().union(*self._tables.values())

    def to_dict(self) -> dict[str, list[str]]:
        """Capability -> mechanism names, sorted by identifier value."""
        return {
            capability.value: [m.ckm_name for m in sorted(members)]
            for capability, members in self._tables.items()
        }
