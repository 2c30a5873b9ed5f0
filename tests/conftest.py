"""Shared fixtures for upgen tests."""

import pytest


class FixedEntropySource:
    """Returns preset bytes and records how many were requested."""

    name = "fixed"

    def __init__(self, data: bytes | None = None, short: bool = False):
        self.data = data
        self.short = short
        self.requests: list[int] = []

    def read(self, num_bytes: int) -> bytes:
        self.requests.append(num_bytes)
        if self.short:
            return b"\x00" * (num_bytes - 1)
        if self.data is None:
            return b"\x00" * num_bytes
        return self.data[:num_bytes].ljust(num_bytes, b"\x00")


@pytest.fixture
def fixed_source():
    return FixedEntropySource


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep UPGEN_* variables from the outer shell out of tests."""
    for name in (
        "UPGEN_PASSWORD_LENGTH",
        "UPGEN_NUM_PASSWORDS",
        "UPGEN_CHARSET",
        "UPGEN_ENTROPY_SOURCE",
        "UPGEN_NUM_QUBITS",
        "UPGEN_ENTROPY_ROUNDS",
    ):
        monkeypatch.delenv(name, raising=False)
