from pathlib import Path

import pytest

from openapi_entities.config import ConvertConfig
from openapi_entities.errors import ConfigError


class TestConvertConfig:
    def test_stdout_sentinel(self):
        assert ConvertConfig(schema_path=Path("api.yaml"), output="-").destination() == "-"

    def test_explicit_output(self):
        config = ConvertConfig(schema_path=Path("api.yaml"), output="out/entities.json")
        assert config.destination() == Path("out/entities.json")

    def test_derived_from_input(self):
        assert ConvertConfig(schema_path=Path("specs/api.yaml")).destination() == Path("specs/api.json")

    def test_refuses_to_overwrite_json_input(self, tmp_path):
        config = ConvertConfig(schema_path=tmp_path / "api.json")
        with pytest.raises(ConfigError, match="overwrite"):
            config.destination()
