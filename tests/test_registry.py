"""Tests for registry construction and the integrity cross-check."""

import json
import threading

import pytest

from pkcs11_registry.core.algorithm_catalog import AlgorithmCatalog, AlgorithmFamily, DigestInfo
from pkcs11_registry.core.capability_index import (
    Capability,
    MechanismCapabilityIndex,
    builtin_capability_tables,
)
from pkcs11_registry.core.exceptions import RegistryIntegrityError
from pkcs11_registry.core.mechanisms import Mechanism
from pkcs11_registry.core.registry import Registry, build_registry, get_registry


class TestBuild:
    """Tests for build_registry."""

    def test_builtin_registry_is_consistent(self, registry):
        assert registry.integrity_problems() == []

    def test_idempotent(self):
        """Building twice gives identical content."""
        first = build_registry()
        second = build_registry()

        assert first is not second
        assert first.snapshot() == second.snapshot()
        assert first.fingerprint() == second.fingerprint()

    def test_snapshot_is_json(self, registry):
        encoded = json.dumps(registry.snapshot(), sort_keys=True)
        assert json.loads(encoded) == registry.snapshot()

    def test_fingerprint_is_sha256_hex(self, registry):
        fingerprint = registry.fingerprint()
        assert len(fingerprint) == 64
        int(fingerprint, 16)

    def test_fingerprint_changes_with_content(self, registry):
        tables = builtin_capability_tables()
        tables[Capability.DIGEST] = tables[Capability.DIGEST] - {Mechanism.FASTHASH}
        other = build_registry(index=MechanismCapabilityIndex(tables))
        assert other.fingerprint() != registry.fingerprint()

    def test_shared_registry_is_cached(self, shared_registry):
        assert get_registry() is shared_registry

    def test_concurrent_readers(self, shared_registry):
        """Readers on several threads see the same answers."""
        results = []

        def reader():
            registry = get_registry()
            results.append((
                registry.supports(Mechanism.AES_CBC, Capability.WRAP_UNWRAP),
                registry.names_of(AlgorithmFamily.CIPHER),
            ))

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(results)) == 1
        assert results[0][0] is True


class TestIntegrityCheck:
    """Tests for the catalog/index cross-check."""

    def test_missing_digest_mechanism(self):
        tables = builtin_capability_tables()
        tables[Capability.DIGEST] = tables[Capability.DIGEST] - {Mechanism.SHA256}

        with pytest.raises(RegistryIntegrityError) as exc_info:
            build_registry(index=MechanismCapabilityIndex(tables))

        assert any("SHA-256" in p for p in exc_info.value.problems)
        assert "CKM_SHA256" in str(exc_info.value)

    def test_missing_key_generation_mechanism(self):
        tables = builtin_capability_tables()
        tables[Capability.GENERATE] = tables[Capability.GENERATE] - {Mechanism.IDEA_KEY_GEN}

        with pytest.raises(RegistryIntegrityError) as exc_info:
            build_registry(index=MechanismCapabilityIndex(tables))

        # Both IDEA modes share the key generation mechanism
        assert len(exc_info.value.problems) == 2

    def test_custom_catalog(self):
        catalog = AlgorithmCatalog({AlgorithmFamily.DIGEST: [DigestInfo("FASTHASH", Mechanism.FASTHASH, 20)]})
        registry = build_registry(catalog=catalog)
        assert registry.names_of(AlgorithmFamily.DIGEST) == ("FASTHASH",)


class TestQueries:
    """Tests for the facade's query shortcuts."""

    def test_lookup_and_supports(self, registry):
        cipher = registry.lookup(AlgorithmFamily.CIPHER, "AES-CBC")
        assert registry.supports(cipher.mechanism, Capability.ENCRYPT_DECRYPT)
        assert registry.supports(cipher.keygen_mechanism, Capability.GENERATE)

    def test_mechanisms_for(self, registry):
        assert registry.mechanisms_for(Capability.SIGN_VERIFY_RECOVER) == registry.index.mechanisms_for(
            Capability.SIGN_VERIFY_RECOVER
        )

    def test_referenced_mechanisms(self, registry):
        """Every mechanism the catalog names is also in the matrix."""
        assert registry.referenced_mechanisms() == registry.index.all_mechanisms()

    def test_sum_of_capability_sizes(self, registry):
        total = sum(len(registry.mechanisms_for(c)) for c in Capability)
        assert total >= len(registry.referenced_mechanisms())

    def test_generation_loop(self, registry):
        """Test generation: every HMAC is signable."""
        for name in registry.names_of(AlgorithmFamily.HMAC):
            info = registry.lookup(AlgorithmFamily.HMAC, name)
            assert registry.supports(info.mechanism, Capability.SIGN_VERIFY)
            assert not registry.supports(info.mechanism, Capability.SIGN_VERIFY_RECOVER)

    def test_registry_is_frozen(self, registry):
        with pytest.raises(AttributeError):
            registry.index = MechanismCapabilityIndex({})

    def test_equal_content_registries(self):
        assert Registry(AlgorithmCatalog.builtin(), MechanismCapabilityIndex.builtin()).snapshot() == (
            build_registry().snapshot()
        )
