"""Run configuration: which document to read and where the envelope goes."""

from pathlib import Path

from pydantic import BaseModel

from openapi_entities.errors import ConfigError
from openapi_entities.generator.emitter import STDOUT


class ConvertConfig(BaseModel):
    schema_path: Path
    output: str | None = None  # explicit path, "-" for stdout, or None to derive one

    def destination(self) -> Path | str:
        """Resolve the output destination.

        Without an explicit output, the input path with a '.json' suffix is used.
        """
        if self.output == STDOUT:
            return STDOUT
        if self.output:
            return Path(self.output)

        derived = self.schema_path.with_suffix(".json")
        if derived.resolve() == self.schema_path.resolve():
            raise ConfigError(
                f"Output would overwrite the input {self.schema_path}; pass -o explicitly"
            )
        return derived
