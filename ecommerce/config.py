from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerDescriptionSettings(BaseSettings):
    API_STR: str = "/v1"

    OPENAPI_URL: str = f"{API_STR}/openapi.json"

    REST_SERVICE_NAME: str = "E-commerce order & inventory service"
    REST_SERVICE_DESCRIPTION: str = "배치 단위 재고 관리와 주문 처리"
    REST_SERVICE_VERSION: str = "0.1.0"


class DataSettings(BaseSettings):
    DB_URI: str = Field(
        validation_alias="DATABASE_URL",
        default="sqlite+aiosqlite:///./ecommerce.db",
    )


class InventoryClientSettings(BaseSettings):
    SERVICE_URL: str = Field(
        validation_alias="INVENTORY_SERVICE_URL",
        default="http://localhost:8000",
    )
    TIMEOUT: float = Field(
        validation_alias="INVENTORY_SERVICE_TIMEOUT",
        default=5.0,
    )


class Settings(BaseSettings):
    DEBUG: bool = Field(validation_alias="DEBUG", default=True)

    desc: ServerDescriptionSettings = ServerDescriptionSettings()
    data: DataSettings = DataSettings()
    inventory: InventoryClientSettings = InventoryClientSettings()

    model_config = SettingsConfigDict(case_sensitive=True)
