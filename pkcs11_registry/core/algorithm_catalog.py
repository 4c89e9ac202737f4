"""Algorithm catalog.

Maps the human-chosen algorithm names used by test cases ("SHA256-HMAC",
"AES-CBC", ...) to the parameters needed to drive that algorithm through a
PKCS#11 token. There are four families:

- HMAC: keyed hash mechanisms and their output length
- Signature: signature mechanisms and the largest input they accept
- Cipher: symmetric ciphers with key type, key generation mechanism,
  block size and IV requirements
- Digest: unkeyed hash mechanisms and their output length

Names are exact, case-sensitive keys. Each family enumerates its names in
declaration order, which is the order tests are generated and reported in.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from pkcs11_registry.core.constants import IV_NOT_APPLICABLE
from pkcs11_registry.core.exceptions import AlgorithmNotFoundError
from pkcs11_registry.core.mechanisms import KeyType, Mechanism


class AlgorithmFamily(str, Enum):
    """Algorithm families held by the catalog."""
    HMAC = "hmac"
    SIGNATURE = "signature"
    CIPHER = "cipher"
    DIGEST = "digest"


@dataclass(frozen=True)
class HmacInfo:
    """A keyed hash algorithm."""
    name: str
    mechanism: Mechanism
    output_length: int  # bytes


@dataclass(frozen=True)
class SignatureInfo:
    """A signature algorithm."""
    name: str
    mechanism: Mechanism
    max_data_length: int  # bytes


@dataclass(frozen=True)
class CipherInfo:
    """A symmetric cipher in a specific mode."""
    name: str
    key_type: KeyType
    keygen_mechanism: Mechanism
    mechanism: Mechanism
    block_size: int  # bytes
    requires_iv: bool
    iv_length: int = IV_NOT_APPLICABLE  # bytes

    def __post_init__(self):
        if self.requires_iv and self.iv_length <= 0:
            raise ValueError(f"{self.name}: IV mode needs a positive iv_length")
        if not self.requires_iv and self.iv_length != IV_NOT_APPLICABLE:
            raise ValueError(f"{self.name}: iv_length set for a mode without IV")


@dataclass(frozen=True)
class DigestInfo:
    """An unkeyed hash algorithm."""
    name: str
    mechanism: Mechanism
    output_length: int  # bytes


AlgorithmRecord = HmacInfo | SignatureInfo | CipherInfo | DigestInfo


def _record_to_dict(record: AlgorithmRecord) -> dict[str, Any]:
    data = asdict(record)
    for key, value in data.items():
        if isinstance(value, Mechanism):
            data[key] = value.ckm_name
        elif isinstance(value, KeyType):
            data[key] = f"CKK_{value.name}"
    return data


def _ecb(name: str, key_type: KeyType, keygen: Mechanism, mechanism: Mechanism, block_size: int) -> CipherInfo:
    return CipherInfo(name, key_type, keygen, mechanism, block_size, requires_iv=False)


def _cbc(name: str, key_type: KeyType, keygen: Mechanism, mechanism: Mechanism, block_size: int) -> CipherInfo:
    return CipherInfo(
        name, key_type, keygen, mechanism, block_size,
        requires_iv=True, iv_length=block_size,
    )


def builtin_hmacs() -> list[HmacInfo]:
    """HMAC algorithms exercised by the test suite."""
    return [
        HmacInfo("MD5-HMAC", Mechanism.MD5_HMAC, 16),
        HmacInfo("SHA1-HMAC", Mechanism.SHA_1_HMAC, 20),
        HmacInfo("SHA256-HMAC", Mechanism.SHA256_HMAC, 256 // 8),
        HmacInfo("SHA384-HMAC", Mechanism.SHA384_HMAC, 384 // 8),
        HmacInfo("SHA512-HMAC", Mechanism.SHA512_HMAC, 512 // 8),
    ]


def builtin_signatures() -> list[SignatureInfo]:
    """Signature algorithms exercised by the test suite."""
    return [
        # Raw PKCS#1 v1.5 limits the data size (PKCS#11 s12.1.6, table 37)
        SignatureInfo("RSA", Mechanism.RSA_PKCS, 64),
        SignatureInfo("MD5-RSA", Mechanism.MD5_RSA_PKCS, 1024),
        SignatureInfo("SHA1-RSA", Mechanism.SHA1_RSA_PKCS, 1024),
        SignatureInfo("SHA256-RSA", Mechanism.SHA256_RSA_PKCS, 1024),
        SignatureInfo("SHA384-RSA", Mechanism.SHA384_RSA_PKCS, 1024),
        SignatureInfo("SHA512-RSA", Mechanism.SHA512_RSA_PKCS, 1024),
    ]


def builtin_ciphers() -> list[CipherInfo]:
    """Symmetric ciphers exercised by the test suite."""
    return [
        _ecb("DES-ECB", KeyType.DES, Mechanism.DES_KEY_GEN, Mechanism.DES_ECB, 8),
        _cbc("DES-CBC", KeyType.DES, Mechanism.DES_KEY_GEN, Mechanism.DES_CBC, 8),
        _ecb("3DES-ECB", KeyType.DES3, Mechanism.DES3_KEY_GEN, Mechanism.DES3_ECB, 8),
        _cbc("3DES-CBC", KeyType.DES3, Mechanism.DES3_KEY_GEN, Mechanism.DES3_CBC, 8),
        _ecb("IDEA-ECB", KeyType.IDEA, Mechanism.IDEA_KEY_GEN, Mechanism.IDEA_ECB, 8),
        _cbc("IDEA-CBC", KeyType.IDEA, Mechanism.IDEA_KEY_GEN, Mechanism.IDEA_CBC, 8),
        _ecb("AES-ECB", KeyType.AES, Mechanism.AES_KEY_GEN, Mechanism.AES_ECB, 16),
        _cbc("AES-CBC", KeyType.AES, Mechanism.AES_KEY_GEN, Mechanism.AES_CBC, 16),
    ]


def builtin_digests() -> list[DigestInfo]:
    """Digest algorithms exercised by the test suite."""
    return [
        DigestInfo("MD5", Mechanism.MD5, 16),
        DigestInfo("SHA-1", Mechanism.SHA_1, 20),
        DigestInfo("SHA-256", Mechanism.SHA256, 256 // 8),
        DigestInfo("SHA-384", Mechanism.SHA384, 384 // 8),
        DigestInfo("SHA-512", Mechanism.SHA512, 512 // 8),
    ]


class AlgorithmCatalog:
    """Read-only catalog of algorithm records, keyed by family and name."""

    def __init__(self, tables: Mapping[AlgorithmFamily, Iterable[AlgorithmRecord]]):
        frozen: dict[AlgorithmFamily, Mapping[str, AlgorithmRecord]] = {}
        for family in AlgorithmFamily:
            table: dict[str, AlgorithmRecord] = {}
            for record in tables.get(family, ()):
                if record.name in table:
                    raise ValueError(f"Duplicate {family.value} algorithm: {record.name!r}")
                table[record.name] = record
            frozen[family] = MappingProxyType(table)
        self._tables = MappingProxyType(frozen)

    @classmethod
    def builtin(cls) -> "AlgorithmCatalog":
        """Catalog of the algorithms the conformance tests exercise."""
        return cls({
            AlgorithmFamily.HMAC: builtin_hmacs(),
            AlgorithmFamily.SIGNATURE: builtin_signatures(),
            AlgorithmFamily.CIPHER: builtin_ciphers(),
            AlgorithmFamily.DIGEST: builtin_digests(),
        })

    def families(self) -> tuple[AlgorithmFamily, ...]:
        return tuple(self._tables)

    def lookup(self, family: AlgorithmFamily, name: str) -> AlgorithmRecord:
        """Get the record for ``name`` in ``family``.

        Raises:
            AlgorithmNotFoundError: If the name is not registered. Matching is
                exact and case-sensitive.
        """
        family = AlgorithmFamily(family)
        table = self._tables[family]
        try:
            return table[name]
        except KeyError:
            raise AlgorithmNotFoundError(family.value, name, tuple(table)) from None

    def names_of(self, family: AlgorithmFamily) -> tuple[str, ...]:
        """All names in a family, in declaration order."""
        return tuple(self._tables[AlgorithmFamily(family)])

    def records_of(self, family: AlgorithmFamily) -> tuple[AlgorithmRecord, ...]:
        """All records in a family, in declaration order."""
        return tuple(self._tables[AlgorithmFamily(family)].values())

    def __contains__(self, item: tuple[AlgorithmFamily, str]) -> bool:
        family, name = item
        return name in self._tables[AlgorithmFamily(family)]

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    # Typed shortcuts used by test cases
    def hmac(self, name: str) -> HmacInfo:
        return self.lookup(AlgorithmFamily.HMAC, name)

    def signature(self, name: str) -> SignatureInfo:
        return self.lookup(AlgorithmFamily.SIGNATURE, name)

    def cipher(self, name: str) -> CipherInfo:
        return self.lookup(AlgorithmFamily.CIPHER, name)

    def digest(self, name: str) -> DigestInfo:
        return self.lookup(AlgorithmFamily.DIGEST, name)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Convert to a JSON-serialisable dictionary, preserving order."""
        return {
            family.value: [_record_to_dict(r) for r in table.values()]
            for family, table in self._tables.items()
        }
