from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
import yaml, pathlib

class ReporterConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    root_dir: Optional[str] = Field(None, description="Directory file paths are reported relative to")
    verbose: bool = Field(False, description="Print the nested describe/it tree instead of one header per file")
    no_highlight: bool = Field(False, description="Plain output: no color codes, newline instead of line erasure")
    collect_coverage: bool = Field(False, description="Accepted for compatibility; coverage is not reported")

def load_config(path: str) -> ReporterConfig:
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return ReporterConfig.model_validate(data)
