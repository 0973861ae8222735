"""Forwarding commands to the external toolchain.

The child runs with the caller's stdin/stdout/stderr and an environment in
which the dependency-root variable (GOPATH by default) is replaced by the
project's `.gong.deps` directory.

Key entities:
  - ToolchainResult: NormalExit | Signaled | SpawnFailed.
  - exit_code_for(): pure mapping from a result to gong's own exit status.
  - forward(): build env, run, map.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .settings import Settings

logger = logging.getLogger(__name__)

# Exit status for anything that is gong's fault rather than the toolchain's
FAILURE_EXIT_CODE = 2


@dataclass(frozen=True)
class NormalExit:
    code: int


@dataclass(frozen=True)
class Signaled:
    signal: int


@dataclass(frozen=True)
class SpawnFailed:
    error: OSError


ToolchainResult = NormalExit | Signaled | SpawnFailed


def build_env(base_env: Mapping[str, str], var: str, value: str) -> dict[str, str]:
    """Copy *base_env* with *var* stripped, then set to *value* if non-empty."""
    env = {k: v for k, v in base_env.items() if k != var}
    if value:
        env[var] = value
    return env


def run_toolchain(
    command: str, args: Sequence[str], env: Mapping[str, str]
) -> ToolchainResult:
    """Run ``command args...`` in the foreground and classify how it ended."""
    argv = [command, *args]
    logger.debug("Running %s", argv)
    try:
        proc = subprocess.run(argv, env=dict(env))
    except OSError as e:
        logger.debug("Failed to spawn %s: %s", command, e)
        return SpawnFailed(e)
    if proc.returncode < 0:
        return Signaled(-proc.returncode)
    return NormalExit(proc.returncode)


def exit_code_for(result: ToolchainResult) -> int:
    """Map a toolchain result to gong's exit status."""
    if isinstance(result, NormalExit):
        return result.code
    return FAILURE_EXIT_CODE


def describe_failure(result: ToolchainResult) -> str | None:
    """Human-readable reason for an abnormal end, or None for a normal exit."""
    if isinstance(result, Signaled):
        return f"terminated by signal {result.signal}"
    if isinstance(result, SpawnFailed):
        return str(result.error)
    return None


def forward(
    settings: Settings,
    args: Sequence[str],
    deps_dir: Path | None,
    base_env: Mapping[str, str] | None = None,
) -> int:
    """Forward *args* to the toolchain and return the exit status to use.

    Args:
        settings: Supplies the toolchain command and variable name.
        args: Arguments passed verbatim after the command.
        deps_dir: Dependency workspace; None leaves the variable unset.
        base_env: Environment to start from. Defaults to ``os.environ``.
    """
    env = build_env(
        os.environ if base_env is None else base_env,
        settings.deps_env_var,
        str(deps_dir) if deps_dir is not None else "",
    )
    if deps_dir is not None:
        logger.info("%s=%s", settings.deps_env_var, deps_dir)

    result = run_toolchain(settings.toolchain_command, args, env)
    reason = describe_failure(result)
    if reason is not None:
        print(f"failed to end cleanly: {reason}")
    return exit_code_for(result)
