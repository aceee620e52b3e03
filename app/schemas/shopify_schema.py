from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator


# Shopify sends null for many unset fields, the warehouse wants "" everywhere.
# extra keys are ignored, numbers in text fields (zip, phone) become strings
_LENIENT = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class _ShopifyModel(BaseModel):
    model_config = _LENIENT

    @field_validator("*", mode="before")
    @classmethod
    def blank_nulls(cls, v: Any, info) -> Any:
        # only text fields are defaulted, optional sub-records stay None
        field = cls.model_fields[info.field_name]
        if v is None and field.annotation is str:
            return ""
        return v


class ShopifyAddress(_ShopifyModel):
    first_name: str = ""
    last_name: str = ""
    company: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    province: str = ""
    province_code: str = ""
    zip: str = ""
    country: str = ""
    country_code: str = ""
    phone: str = ""


class ShopifyCustomer(_ShopifyModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class ShopifyLineItem(_ShopifyModel):
    id: Optional[Union[int, str]] = None
    sku: str = ""
    variant_sku: str = ""
    # validated by the translator, not here: a bad quantity is a mapping error
    quantity: Optional[int] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def integral_or_none(cls, v: Any) -> Optional[int]:
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, float) and v.is_integer():
            return int(v)
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                return None
        return None


class ShopifyOrder(_ShopifyModel):
    """
    The subset of a Shopify `orders/create` payload the relay reads.
    Decoded once at the boundary; translation only ever sees this type.
    """
    id: Optional[Union[int, str]] = None
    name: str = ""
    email: str = ""
    contact_email: str = ""
    phone: str = ""
    customer: Optional[ShopifyCustomer] = None
    shipping_address: Optional[ShopifyAddress] = None
    billing_address: Optional[ShopifyAddress] = None
    line_items: list[ShopifyLineItem] = []

    @field_validator("line_items", mode="before")
    @classmethod
    def no_items_when_null(cls, v: Any) -> Any:
        return [] if v is None else v
