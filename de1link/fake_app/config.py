from functools import lru_cache

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class SimulatorSettings(BaseSettings):
    host: str = Field("127.0.0.1", validation_alias="DE1_HOST")
    port: int = Field(10281, validation_alias="DE1_PORT")

    tick_period: float = Field(1.0, gt=0, validation_alias="DE1_TICK_PERIOD")
    line_buffer_size: int = Field(64, gt=0, validation_alias="DE1_LINE_BUFFER_SIZE")
    read_chunk_size: int = Field(64, gt=0, validation_alias="DE1_READ_CHUNK_SIZE")

    log_ring_size: int = Field(200, gt=0, validation_alias="DE1_LOG_RING_SIZE")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> SimulatorSettings:
    return SimulatorSettings()
