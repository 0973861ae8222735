"""Root conftest — isolates gong config BEFORE any gong module is imported.

Points GONG_DIR at an empty temp dir and clears the GONG_* overrides so a
developer's real ~/.gong or shell environment never leaks into tests.
"""

import os
import tempfile

# Force-set (not setdefault) to prevent real env vars from leaking into tests
os.environ["GONG_DIR"] = tempfile.mkdtemp(prefix="gong-test-")
for _var in ("GONG_TOOLCHAIN", "GONG_DEPS_VAR", "GONG_LOG_LEVEL"):
    os.environ.pop(_var, None)
