from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from pgp_keygen.config import KeyGenConfig
from pgp_keygen.core.random_source import GenerationContext, SecureRandom


def test_read_returns_requested_number_of_bytes() -> None:
    rng = SecureRandom()

    assert len(rng.read(32)) == 32
    assert rng.bytes_read == 32


def test_read_uses_supplied_randfunc() -> None:
    randfunc = Mock(return_value=b"\x01\x02\x03")
    rng = SecureRandom(randfunc)

    assert rng.read(3) == b"\x01\x02\x03"
    randfunc.assert_called_once_with(3)


def test_read_raises_on_short_read() -> None:
    rng = SecureRandom(Mock(return_value=b"\x00"))

    with pytest.raises(ValueError, match="returned 1 bytes, expected 4"):
        rng.read(4)


def test_read_raises_on_negative_size() -> None:
    with pytest.raises(ValueError, match="negative"):
        SecureRandom().read(-1)


def test_random_range_stays_within_bounds() -> None:
    rng = SecureRandom()

    values = [rng.random_range(2, 10) for _ in range(200)]

    assert all(2 <= v < 10 for v in values)
    assert isinstance(values[0], int)


def test_concurrent_reads_are_all_accounted_for() -> None:
    rng = SecureRandom()

    with ThreadPoolExecutor(max_workers=8) as pool:
        chunks = list(pool.map(lambda _: rng.read(16), range(200)))

    assert all(len(chunk) == 16 for chunk in chunks)
    assert rng.bytes_read == 200 * 16


def test_context_create_uses_fresh_random_source() -> None:
    config = KeyGenConfig(dsa_max_seed_attempts=5)

    first = GenerationContext.create(config)
    second = GenerationContext.create(config)

    assert first.rng is not second.rng
    assert first.config is config


def test_context_defaults() -> None:
    context = GenerationContext()

    assert isinstance(context.rng, SecureRandom)
    assert context.config == KeyGenConfig()
