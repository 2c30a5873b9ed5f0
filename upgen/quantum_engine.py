from __future__ import annotations

"""
Quantum engine: builds a circuit, puts qubits in superposition,
measures them in alternating bases, and returns raw bits.
"""
from qiskit import QuantumCircuit, transpile
from qiskit.exceptions import QiskitError
from qiskit_aer import AerSimulator

from .errors import ConfigError, EntropyError


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, num_qubits: int = 20) -> None:
        self.num_qubits = num_qubits
        # Local simulator backend.
        self.backend = AerSimulator()
        self.last_measurement_basis: list[str] | None = None

        max_qubits = getattr(self.backend, "num_qubits", None)
        if max_qubits is not None and num_qubits > max_qubits:
            raise ConfigError(
                f"Configured num_qubits={num_qubits} exceeds "
                f"backend limit ({max_qubits}). "
                "Lower num_qubits in PasswordConfig."
            )

    def _build_circuit(self) -> tuple[QuantumCircuit, list[str]]:
        """
        Measure N qubits in alternating bases (Z, X, Z, X, ...), each
        prepared in an eigenstate of the *other* basis so every outcome
        is a fair coin.
        """
        n = self.num_qubits
        measurement_basis: list[str] = []

        qc = QuantumCircuit(n, n)

        # Even indices: |+> measured in Z.
        # Odd indices: |0> measured in X (H rotates X onto Z).
        # Exactly one H per qubit; two would cancel to the identity.
        for i in range(n):
            qc.h(i)
            measurement_basis.append("X" if i % 2 == 1 else "Z")
            qc.measure(i, i)

        return qc, measurement_basis

    def get_raw_bits(self, num_bits: int) -> list[int]:
        """
        Run the circuit for as many shots as needed and return exactly
        `num_bits` measured bits.
        """
        if num_bits <= 0:
            return []

        qc, measurement_basis = self._build_circuit()
        shots = -(-num_bits // self.num_qubits)

        try:
            tqc = transpile(qc, self.backend)
            result = self.backend.run(tqc, shots=shots, memory=True).result()
            memory = result.get_memory()
        except QiskitError as exc:
            raise EntropyError(f"Quantum backend failed: {exc}") from exc

        bits: list[int] = []
        for bitstring in memory:
            # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
            bits.extend(int(b) for b in bitstring[::-1])

        self.last_measurement_basis = measurement_basis
        return bits[:num_bits]
