"""
Command-line interface and high-level generator functions.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .charset import compile_charset
from .config import DEFAULT_CONFIG, PasswordConfig
from .entropy import EntropySource, get_entropy_source
from .errors import UpgenError
from .sampler import entropy_bytes_needed, sample_passwords

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)


@dataclass
class GenerationMeta:
    """
    Full result of one generation call.
    """
    passwords: list[str]

    # Compiled alphabet, ascending by byte value
    charset: str

    # Which source supplied the random bytes, and how many were drawn
    entropy_source: str
    entropy_bytes: int

    # Theoretical strength of each password
    entropy_bits: float
    config: PasswordConfig


def generate_with_meta(
    charset_spec: str | bytes | None = None,
    password_len: int | None = None,
    num_passwords: int | None = None,
    config: PasswordConfig | None = None,
    source: EntropySource | None = None,
) -> GenerationMeta:
    """
    High-level generation pipeline with metadata:

    - Validate length/count (explicit arguments win over `config`).
    - Compile the charset spec; None means all typeable ASCII.
    - Draw once from the configured entropy source and sample.
    """
    cfg = config or DEFAULT_CONFIG
    overrides: dict = {}
    if charset_spec is not None:
        overrides["charset_spec"] = charset_spec
    if password_len is not None:
        overrides["password_length"] = password_len
    if num_passwords is not None:
        overrides["num_passwords"] = num_passwords
    cfg = replace(cfg, **overrides)
    cfg.validate()

    charset = compile_charset(cfg.charset_spec)
    src = source or get_entropy_source(cfg)
    num_bytes = entropy_bytes_needed(
        len(charset), cfg.password_length * cfg.num_passwords
    )
    logger.info(
        "Generating %d password(s) of length %d over %d characters (source=%s)",
        cfg.num_passwords,
        cfg.password_length,
        len(charset),
        src.name,
    )

    passwords = sample_passwords(
        charset, cfg.password_length, cfg.num_passwords, src
    )

    entropy_bits = cfg.password_length * math.log2(len(charset))
    logger.debug("Entropy per password: %.1f bits", entropy_bits)

    return GenerationMeta(
        passwords=passwords,
        charset=bytes(charset).decode("ascii"),
        entropy_source=src.name,
        entropy_bytes=num_bytes,
        entropy_bits=entropy_bits,
        config=cfg,
    )


def generate(
    charset_spec: str | bytes | None = None,
    password_len: int | None = None,
    num_passwords: int | None = None,
    config: PasswordConfig | None = None,
) -> list[str]:
    """
    High-level function: compile, draw, sample. Returns only the passwords.
    """
    meta = generate_with_meta(charset_spec, password_len, num_passwords, config)
    return meta.passwords


# ---------- typer command ----------

CHARSET_HELP = """
The charset specification language is a subset of the character set language
for regular expressions. Only characters and ranges are allowed. Literal
hyphens and backslashes must be escaped. Other characters must not be
escaped. An initial caret may be used to invert the character set with
respect to typeable ASCII characters.
"""

app = typer.Typer(
    name="upgen",
    help="Generates random passwords.",
    epilog=CHARSET_HELP,
    add_completion=False,
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def generate_command(
    charset_spec: Optional[str] = typer.Option(
        None, "--charset", "-c", help="Use this character set."
    ),
    password_len: Optional[int] = typer.Option(
        None, "--length", "-l", help="Generate passwords of this length (default 24)."
    ),
    num_passwords: Optional[int] = typer.Option(
        None, "--count", "-n", help="Generate this many passwords (default 1)."
    ),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Entropy source: os or quantum."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log progress to stderr."
    ),
) -> None:
    """
    Generates random passwords.
    """
    _setup_logging(verbose)

    try:
        cfg = PasswordConfig.from_env()
        if source is not None:
            cfg = replace(cfg, entropy_source=source.strip().lower())
        passwords = generate(charset_spec, password_len, num_passwords, cfg)
    except UpgenError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)

    for password in passwords:
        typer.echo(password)


def main() -> None:
    """
    Entry point for `upgen`, `python -m upgen` or `run_upgen.py`.
    """
    app()
