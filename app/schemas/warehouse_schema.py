from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class WarehouseShipping(BaseModel):
    first_name: str
    last_name: str
    company_name: str
    address_street: str
    zip_code: str
    city: str
    state_province_code: str = Field(..., max_length=2)
    country_code: str = Field(..., max_length=2)
    phone_number: str
    email: str


class CartItem(BaseModel):
    item_id: int
    quantity: int = Field(..., gt=0)


class WarehouseOrder(BaseModel):
    """
    Body of `POST /orders` on the warehouse api.
    custom_id + check_multiple_custom_id is what stops the warehouse from
    fulfilling the same Shopify order twice when Shopify re-sends it.
    """
    model_config = ConfigDict(frozen=True)

    custom_id: str = Field(..., min_length=1)
    check_multiple_custom_id: bool = True
    idle: bool = False
    shipping: WarehouseShipping
    cart: list[CartItem] = Field(..., min_length=1)


# its like enum form
class DeliveryStatus(str, Enum):
    DELIVERED = "delivered"
    # warehouse answered and said no (or yes without success), retry is useless
    REJECTED_PERMANENTLY = "rejected_permanently"
    # warehouse down, 5xx or network trouble, Shopify should retry
    FAILED_TRANSIENTLY = "failed_transiently"


class DeliveryOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: DeliveryStatus
    reason: str = ""
    http_status: Optional[int] = None
    # true when the warehouse never answered (refused, timeout, dns)
    network_error: bool = False

    @classmethod
    def delivered(cls, http_status: Optional[int] = None) -> "DeliveryOutcome":
        return cls(status=DeliveryStatus.DELIVERED, http_status=http_status)

    @classmethod
    def rejected(cls, reason: str, http_status: Optional[int] = None) -> "DeliveryOutcome":
        return cls(status=DeliveryStatus.REJECTED_PERMANENTLY, reason=reason, http_status=http_status)

    @classmethod
    def unavailable(
        cls, reason: str, http_status: Optional[int] = None, network_error: bool = False
    ) -> "DeliveryOutcome":
        return cls(
            status=DeliveryStatus.FAILED_TRANSIENTLY,
            reason=reason,
            http_status=http_status,
            network_error=network_error,
        )

    @property
    def should_retry(self) -> bool:
        return self.status is DeliveryStatus.FAILED_TRANSIENTLY
