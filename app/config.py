from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    elevenlabs_webhook_secret: str = ""
    elevenlabs_api_key: str = ""
    signature_tolerance_secs: int = 30 * 60
    log_level: str = "INFO"
    service_name: str = "Patient Intake Phone Agent"
