"""
Example 02: Overrides, Custom Mappers and Hooks

This example shows how to pick subclass destinations, replace structural
mapping for a type, observe finished mappings and switch to strict mode.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from graph_mapper import Mapper, MapperConfig, StrictModeViolation


class Currency(Enum):
    EUR = "eur"
    USD = "usd"


class Money:
    def __init__(self, amount, currency):
        self.amount = amount
        self.currency = currency


class Product:
    def __init__(self, name, price):
        self.name = name
        self.price = price


class DigitalProduct(Product):
    def __init__(self, name, price, download_url):
        super().__init__(name, price)
        self.download_url = download_url


class Cart:
    def __init__(self, featured, items):
        self.featured = featured
        self.items = items


class ProductView(BaseModel):
    name: str
    price: Optional[str] = None


class DigitalProductView(ProductView):
    download_url: Optional[str] = None


class CartView(BaseModel):
    featured: Optional[ProductView] = None
    items: dict[str, ProductView] = {}
    currency_code: Optional[str] = None


def main():
    ebook = DigitalProduct(
        "Ebook", Money(Decimal("9.99"), Currency.EUR), "https://example.com/ebook"
    )
    mug = Product("Mug", Money(Decimal("12.00"), Currency.EUR))
    cart = Cart(featured=ebook, items={"ebook": ebook, "mug": mug})

    audit = []
    mapper = (
        Mapper()
        .mapping(DigitalProduct, DigitalProductView)
        .custom_mapper(Money, str, lambda money, context: f"{money.amount} {money.currency.name}")
        .hook(Product, ProductView, lambda product, view: audit.append(view.name))
    )

    print("=== Overrides, Custom Mappers and Hooks ===\n")

    view = mapper.map(cart, CartView)
    print(f"Featured: {type(view.featured).__name__} {view.featured.name} ({view.featured.price})")
    print(f"Download: {view.featured.download_url}")
    print(f"Items: {sorted(view.items)}")
    print(f"Featured item shared: {view.featured is view.items['ebook']}")
    print(f"Hooks fired for: {audit}\n")

    # Strict mode rejects the unmatched currency_code field
    strict = Mapper(MapperConfig(strict=True)).custom_mapper(
        Money, str, lambda money, context: str(money.amount)
    )
    try:
        strict.map(cart, CartView)
    except StrictModeViolation as e:
        print(f"Strict mode: {e}")


if __name__ == "__main__":
    main()
