from typing import Literal
from pydantic import BaseModel, Field

class SystemSettings(BaseModel):
    """
    Global system configuration settings.
    """
    # Data service
    data_service_url: str = Field(default="http://localhost:8080", description="Measurement data service base URL")
    data_service_timeout: float = Field(default=30.0, description="Data service request timeout in seconds")
    data_service_token: str | None = Field(default=None, description="Bearer token for the data service")

    # Thresholds
    thresholds_file: str = Field(default="thresholds.yaml", description="Path to volume thresholds file")

    # Evaluation
    timezone: str = Field(default="UTC", description="Timezone reference dates are evaluated in")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Root log level")

    def get_headers(self) -> dict[str, str]:
        """Headers sent with every data service request."""
        if self.data_service_token:
            return {"Authorization": f"Bearer {self.data_service_token}"}
        return {}
