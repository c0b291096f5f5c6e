import json
from pathlib import Path

from pydantic import BaseModel


class FileConfig(BaseModel):
    base_dir: str


class MetadataConfig(BaseModel):
    sql_url: str


class Config(BaseModel):
    host: str
    port: int
    secret_key: str = ''  # empty disables the check
    file: FileConfig
    metadata: MetadataConfig


config_path = Path(__file__).parent / 'config.json'
with open(config_path) as f:
    config = Config(**json.load(f))
