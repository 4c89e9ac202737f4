"""Mechanism capability registry.

Bundles the algorithm catalog and the capability index into one immutable
value, built in a single initialization step:

    from pkcs11_registry.core.registry import get_registry

    registry = get_registry()
    for name in registry.catalog.names_of(AlgorithmFamily.CIPHER):
        cipher = registry.catalog.cipher(name)
        if registry.index.supports(cipher.mechanism, Capability.WRAP_UNWRAP):
            ...

``get_registry()`` builds once per process; ``build_registry()`` always
builds a fresh instance, for harnesses that keep independent contexts.
"""

import hashlib
import json
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pkcs11_registry.core.algorithm_catalog import (
    AlgorithmCatalog,
    AlgorithmFamily,
    AlgorithmRecord,
)
from pkcs11_registry.core.capability_index import Capability, MechanismCapabilityIndex
from pkcs11_registry.core.exceptions import RegistryIntegrityError
from pkcs11_registry.core.logging import get_logger, log_operation
from pkcs11_registry.core.mechanisms import Mechanism

logger = get_logger(__name__)


# Capability each catalog family's primary mechanism must carry
FAMILY_CAPABILITY = {
    AlgorithmFamily.HMAC: Capability.SIGN_VERIFY,
    AlgorithmFamily.SIGNATURE: Capability.SIGN_VERIFY,
    AlgorithmFamily.CIPHER: Capability.ENCRYPT_DECRYPT,
    AlgorithmFamily.DIGEST: Capability.DIGEST,
}


@dataclass(frozen=True)
class Registry:
    """Algorithm catalog plus capability index."""

    catalog: AlgorithmCatalog
    index: MechanismCapabilityIndex

    # Query shortcuts
    def lookup(self, family: AlgorithmFamily, name: str) -> AlgorithmRecord:
        return self.catalog.lookup(family, name)

    def names_of(self, family: AlgorithmFamily) -> tuple[str, ...]:
        return self.catalog.names_of(family)

    def supports(self, mechanism: Mechanism | int, capability: Capability) -> bool:
        return self.index.supports(mechanism, capability)

    def mechanisms_for(self, capability: Capability) -> frozenset[Mechanism]:
        return self.index.mechanisms_for(capability)

    def referenced_mechanisms(self) -> frozenset[Mechanism]:
        """Every mechanism named by the catalog or the index."""
        mechanisms = set(self.index.all_mechanisms())
        for record in self.catalog.records_of(AlgorithmFamily.CIPHER):
            mechanisms.add(record.keygen_mechanism)
        for family in self.catalog.families():
            mechanisms.update(r.mechanism for r in self.catalog.records_of(family))
        return frozenset(mechanisms)

    def integrity_problems(self) -> list[str]:
        """Catalog mechanisms missing from the capability they are used for."""
        problems = []
        for family, capability in FAMILY_CAPABILITY.items():
            for record in self.catalog.records_of(family):
                if not self.index.supports(record.mechanism, capability):
                    problems.append(
                        f"{family.value} {record.name}: "
                        f"{record.mechanism.ckm_name} not in {capability.value}"
                    )
        for record in self.catalog.records_of(AlgorithmFamily.CIPHER):
            if not self.index.supports(record.keygen_mechanism, Capability.GENERATE):
                problems.append(
                    f"cipher {record.name}: "
                    f"{record.keygen_mechanism.ckm_name} not in {Capability.GENERATE.value}"
                )
        return problems

    def snapshot(self) -> dict[str, Any]:
        """JSON-serialisable dump of all registry content."""
        return {
            "algorithms": self.catalog.to_dict(),
            "capabilities": self.index.to_dict(),
        }

    def fingerprint(self) -> str:
        """SHA-256 of the canonical JSON snapshot."""
        canonical = json.dumps(self.snapshot(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


@log_operation("build_registry")
def build_registry(
    catalog: AlgorithmCatalog | None = None,
    index: MechanismCapabilityIndex | None = None,
) -> Registry:
    """Build and verify a registry.

    Args:
        catalog: Algorithm catalog (defaults to the built-in catalog)
        index: Capability index (defaults to the built-in matrix)

    Raises:
        RegistryIntegrityError: If a catalog mechanism is missing from the
            capability it is exercised under.
    """
    if catalog is None:
        catalog = AlgorithmCatalog.builtin()
    if index is None:
        index = MechanismCapabilityIndex.builtin()
    registry = Registry(catalog=catalog, index=index)

    problems = registry.integrity_problems()
    if problems:
        logger.error("Registry integrity check failed", problems=problems)
        raise RegistryIntegrityError(problems)

    logger.info(
        "Registry built",
        algorithms=len(registry.catalog),
        mechanisms=len(registry.index.all_mechanisms()),
        fingerprint=registry.fingerprint()[:16],
    )
    return registry


@lru_cache
def get_registry() -> Registry:
    """Get the process-wide registry instance."""
    return build_registry()
