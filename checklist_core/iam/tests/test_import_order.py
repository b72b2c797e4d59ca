import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _cold_import(*modules: str) -> subprocess.CompletedProcess:
    # fresh interpreter: an import cycle only shows up on the first import
    code = "import django; django.setup()\n" + "".join(f"import {m}\n" for m in modules)
    env = dict(os.environ, DJANGO_SETTINGS_MODULE="config.settings.test", DJANGO_ENV="test")
    return subprocess.run(
        [sys.executable, "-c", code],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=120,
    )


@pytest.mark.parametrize(
    "modules",
    [
        ("config.urls",),
        ("checklist_core.iam.scope", "config.urls"),
        ("checklist_core.iam.auth", "config.urls"),
    ],
)
def test_url_conf_imports_in_a_fresh_process(modules):
    result = _cold_import(*modules)
    assert result.returncode == 0, result.stderr
