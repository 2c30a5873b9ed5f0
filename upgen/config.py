"""
Configuration for the uniform password generator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .errors import ConfigError, ParameterError


DEFAULT_PASSWORD_LENGTH = 24
DEFAULT_NUM_PASSWORDS = 1

ENTROPY_SOURCES = ("os", "quantum")


@dataclass
class PasswordConfig:
    # Desired password length in characters.
    password_length: int = DEFAULT_PASSWORD_LENGTH

    # How many passwords to produce from a single entropy draw.
    num_passwords: int = DEFAULT_NUM_PASSWORDS

    # Charset specification, e.g. "a-zA-Z0-9". None means every
    # typeable ASCII character.
    charset_spec: str | None = None

    # Where the random bytes come from: "os" or "quantum".
    entropy_source: str = "os"

    # Qubits per shot for the quantum source.
    # NOTE: Keep this <= backend limit (often 20-29 for local simulators).
    num_qubits: int = 20

    # SHAKE-256 mixing rounds applied to quantum output (0 = none).
    entropy_rounds: int = 0

    # XOR quantum output with an equal-length OS draw.
    # NOTE: Aer is a seeded simulator, not a CSPRNG. With this off the
    # quantum source is uniform but not cryptographic.
    mix_os_entropy: bool = True

    def validate(self) -> None:
        if self.password_length == 0:
            raise ParameterError("password length must not be zero")
        if self.password_length < 0:
            raise ParameterError("password length must be positive")
        if self.num_passwords == 0:
            raise ParameterError("number of passwords must not be zero")
        if self.num_passwords < 0:
            raise ParameterError("number of passwords must be positive")
        if self.entropy_source not in ENTROPY_SOURCES:
            raise ConfigError(
                f"Unknown entropy source {self.entropy_source!r}. "
                f"Expected one of: {', '.join(ENTROPY_SOURCES)}"
            )
        if self.num_qubits < 1:
            raise ConfigError("num_qubits must be at least 1")
        if self.entropy_rounds < 0:
            raise ConfigError("entropy_rounds must not be negative")

    @classmethod
    def from_env(cls, base: PasswordConfig | None = None) -> PasswordConfig:
        """
        Overlay UPGEN_* environment variables on top of `base`
        (or the defaults).
        """
        cfg = base or cls()
        overrides: dict = {}

        if val := os.environ.get("UPGEN_PASSWORD_LENGTH"):
            overrides["password_length"] = _env_int("UPGEN_PASSWORD_LENGTH", val)
        if val := os.environ.get("UPGEN_NUM_PASSWORDS"):
            overrides["num_passwords"] = _env_int("UPGEN_NUM_PASSWORDS", val)
        if val := os.environ.get("UPGEN_CHARSET"):
            overrides["charset_spec"] = val
        if val := os.environ.get("UPGEN_ENTROPY_SOURCE"):
            overrides["entropy_source"] = val.strip().lower()
        if val := os.environ.get("UPGEN_NUM_QUBITS"):
            overrides["num_qubits"] = _env_int("UPGEN_NUM_QUBITS", val)
        if val := os.environ.get("UPGEN_ENTROPY_ROUNDS"):
            overrides["entropy_rounds"] = _env_int("UPGEN_ENTROPY_ROUNDS", val)

        return replace(cfg, **overrides)


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid integer for {name}: {value!r}") from None


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = PasswordConfig()
