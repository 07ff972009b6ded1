"""Run external command-line tools."""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
from typing import Any

logger = logging.getLogger(__name__)


def is_installed(program: str) -> bool:
    """Check whether ``program`` is on PATH."""
    return shutil.which(program) is not None


async def run_command(args: list[str], timeout: float = 15.0) -> str | None:
    """Run a command and return its stripped stdout.

    Returns None when the program is missing, exits non-zero, or does not
    finish within ``timeout`` seconds.
    """
    logger.debug(f"Running: {' '.join(args)}")
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.debug(f"Could not start {args[0]}: {e}")
        return None

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.warning(f"{args[0]} timed out after {timeout:.0f}s")
        return None

    if process.returncode != 0:
        logger.debug(
            f"{args[0]} exited with {process.returncode}: "
            f"{stderr.decode('utf-8', errors='replace').strip()}"
        )
        return None

    return stdout.decode("utf-8", errors="replace").strip()


def parse_json(text: str | None) -> Any:
    """Decode JSON output, or None if there is none or it is invalid."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError as e:
        logger.debug(f"Invalid JSON output: {e}")
        return None
