from typing import Dict, Literal
from pydantic import SecretStr
from pydantic_settings import BaseSettings

# numeric -> the SKU itself is the warehouse item id
# table   -> the SKU is looked up in sku_map
SkuPolicy = Literal["numeric", "table"]


# this class is inherit from inbuilt python class: BaseSettings
class Settings(BaseSettings):
    app_name: str = "Shopify Warehouse Order Relay"
    environment: str = "local"  # local | dev | prod
    # shared with Shopify, signs every inbound webhook body
    shopify_webhook_secret: SecretStr = SecretStr("")
    signature_header: str = "x-shopify-hmac-sha256"
    # bearer token for the warehouse api (also sent back to us on notifications)
    warehouse_token: SecretStr = SecretStr("")
    warehouse_base_url: str = "https://wall.cdclick-europe.com/api"
    warehouse_timeout_seconds: float = 20.0
    sku_policy: SkuPolicy = "numeric"
    # given as JSON in the environment, e.g. SKU_MAP='{"TEE-BLK-M": 1042}'
    sku_map: Dict[str, int] = {}
    # true -> warehouse queues the order instead of producing it immediately
    idle: bool = False

    class Config:
        # loading environment file it is available
        # if any key is found in env file then key becomes in uppercase and will match with respective key of class:Settings
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def orders_url(self) -> str:
        return f"{self.warehouse_base_url.rstrip('/')}/orders"


# getting settings class instances-object
settings = Settings()
