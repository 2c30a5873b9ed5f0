"""
Uniform password generator package.
"""

from .config import PasswordConfig, DEFAULT_CONFIG
from .charset import compile_charset, parse_charset_spec
from .sampler import sample_passwords
from .cli import generate, generate_with_meta

__all__ = [
    "PasswordConfig",
    "DEFAULT_CONFIG",
    "compile_charset",
    "parse_charset_spec",
    "sample_passwords",
    "generate",
    "generate_with_meta",
]
