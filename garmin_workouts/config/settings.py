from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    default_sport: str = Field(default="running", validation_alias="WORKOUT_DEFAULT_SPORT")
    default_sub_sport: str = Field(default="generic", validation_alias="WORKOUT_DEFAULT_SUB_SPORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: str = Field(
        default="",
        validation_alias="WORKOUT_LOG_DIR",
        description="Directory for rotating CLI log files (empty disables file logging)",
    )
    fit_serial_number: int = Field(default=12345, validation_alias="WORKOUT_FIT_SERIAL_NUMBER")
    fit_product: int = Field(default=1, validation_alias="WORKOUT_FIT_PRODUCT")
    verify_fit_output: bool = Field(
        default=True,
        validation_alias="WORKOUT_VERIFY_FIT",
        description="Decode generated FIT files with the Garmin FIT SDK before writing",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("fit_serial_number")
    @classmethod
    def validate_serial_number(cls, value: int) -> int:
        """FIT serial numbers are uint32z; zero is the invalid marker."""
        if value <= 0 or value > 0xFFFFFFFF:
            logger.warning(f"WORKOUT_FIT_SERIAL_NUMBER {value} is out of range. Defaulting to 12345.")
            return 12345
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
