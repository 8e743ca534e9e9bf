"""Contract tests for TokenGenerators which promise monotonic order."""

import pytest


@pytest.mark.parametrize("count", [2_000, 10_000])
def test_monotonic_order_single_thread(monotonic_token_generator, count):
    """Tokens are lexicographically increasing when generated in a single thread."""
    tokens = [monotonic_token_generator.new_token() for _ in range(count)]
    assert tokens == sorted(tokens)
    assert len(set(tokens)) == count
