"""Reusable pytest markers describing operating-system expectations."""

from __future__ import annotations

import sys

import pytest

OS_AGNOSTIC = pytest.mark.os_agnostic
LINUX_ONLY = pytest.mark.skipif(not sys.platform.startswith("linux"), reason="Requires Linux")
POSIX_ONLY = pytest.mark.skipif(sys.platform == "win32", reason="Requires POSIX sockets")

__all__ = ["LINUX_ONLY", "OS_AGNOSTIC", "POSIX_ONLY"]
