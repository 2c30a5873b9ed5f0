"""
Entropy sources:
Supply uniformly random bytes to the sampler, either straight from the
operating system or from measured qubits mixed with the OS pool.
"""

from __future__ import annotations

import hashlib
import logging
import os
from typing import List, Protocol

from .config import DEFAULT_CONFIG, PasswordConfig
from .errors import ConfigError, EntropyError

logger = logging.getLogger(__name__)


def bits_to_bytes(bits: List[int]) -> bytes:
    """
    Pack a list of bits [0,1,1,0,...] into bytes (8 bits per byte, MSB first).
    If bits length is not a multiple of 8, pad with zeros at the end.
    """
    if not bits:
        return b""

    pad_len = (8 - (len(bits) % 8)) % 8
    bits_padded = bits + [0] * pad_len

    byte_values = []
    for i in range(0, len(bits_padded), 8):
        byte = 0
        for bit in bits_padded[i : i + 8]:
            byte = (byte << 1) | bit
        byte_values.append(byte)

    return bytes(byte_values)


def amplify_entropy(data: bytes, rounds: int = 1) -> bytes:
    """
    Re-hash `data` with SHAKE-256 `rounds` times, keeping its length.
    """
    if rounds <= 0 or not data:
        return data

    for _ in range(rounds):
        data = hashlib.shake_256(data).digest(len(data))
    return data


def xor_bytes(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError("xor_bytes needs equal-length inputs")
    return bytes(x ^ y for x, y in zip(a, b))


class EntropySource(Protocol):
    name: str

    def read(self, num_bytes: int) -> bytes:
        ...


class OsEntropySource:
    """
    Operating-system CSPRNG (os.urandom).
    """

    name = "os"

    def read(self, num_bytes: int) -> bytes:
        logger.debug("Reading %d bytes from os.urandom", num_bytes)
        try:
            return os.urandom(num_bytes)
        except (OSError, NotImplementedError) as exc:
            raise EntropyError(f"OS entropy unavailable: {exc}") from exc


class QuantumEntropySource:
    """
    Bytes from qubits measured on the Aer simulator.

    The measured stream is optionally re-hashed (entropy_rounds) and, when
    mix_os_entropy is set, XOR-combined with an OS draw of the same size.
    Aer is a seeded simulator: without OS mixing the output is uniform but
    not cryptographically secure.
    """

    name = "quantum"

    def __init__(self, config: PasswordConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._engine = None

    def _get_engine(self):
        if self._engine is None:
            # qiskit is slow to import; only pay for it when asked.
            from .quantum_engine import QuantumEngine

            self._engine = QuantumEngine(self.config.num_qubits)
        return self._engine

    def read(self, num_bytes: int) -> bytes:
        cfg = self.config
        logger.debug(
            "Measuring %d bits on %d qubits", num_bytes * 8, cfg.num_qubits
        )
        try:
            bits = self._get_engine().get_raw_bits(num_bytes * 8)
        except ImportError as exc:
            raise EntropyError(f"Quantum entropy unavailable: {exc}") from exc

        data = amplify_entropy(bits_to_bytes(bits), cfg.entropy_rounds)

        if cfg.mix_os_entropy:
            data = xor_bytes(data, OsEntropySource().read(num_bytes))
        else:
            logger.warning(
                "Quantum entropy is not mixed with OS entropy; "
                "output is not cryptographically secure"
            )
        return data


def get_entropy_source(config: PasswordConfig | None = None) -> EntropySource:
    cfg = config or DEFAULT_CONFIG
    if cfg.entropy_source == "os":
        return OsEntropySource()
    if cfg.entropy_source == "quantum":
        return QuantumEntropySource(cfg)
    raise ConfigError(f"Unknown entropy source {cfg.entropy_source!r}")
