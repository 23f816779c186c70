from pathlib import Path

import pytest

CONFIG_YAML = """\
api_key: sk-test
model: gpt-4o-mini
max_tokens: 256
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / ".lqyconfig.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path
