"""Preset variable collections for common label layouts."""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Dict, Iterable, Tuple

from .definitions import VariableDefinition, VariableType, create_variable


def _shipping() -> Tuple[VariableDefinition, ...]:
    return (
        create_variable("recipientName", VariableType.TEXT, "John Doe", "Recipient full name"),
        create_variable("recipientAddress", VariableType.TEXT, "123 Main St", "Recipient address"),
        create_variable("recipientCity", VariableType.TEXT, "New York", "Recipient city"),
        create_variable("recipientZip", VariableType.TEXT, "10001", "Recipient ZIP code"),
        create_variable("trackingNumber", VariableType.BARCODE, "TRK123456789", "Package tracking number"),
        create_variable("shipDate", VariableType.DATE, None, "Ship date"),
        create_variable("weight", VariableType.NUMBER, 5.5, "Package weight in lbs"),
    )


def _product() -> Tuple[VariableDefinition, ...]:
    return (
        create_variable("productName", VariableType.TEXT, "Sample Product", "Product name"),
        create_variable("productSKU", VariableType.TEXT, "SKU-12345", "Product SKU"),
        create_variable("productPrice", VariableType.NUMBER, 29.99, "Product price"),
        create_variable("productBarcode", VariableType.BARCODE, "1234567890123", "Product barcode"),
        create_variable("productDescription", VariableType.TEXT, "Product description", "Product description"),
        create_variable("manufacturingDate", VariableType.DATE, None, "Manufacturing date"),
        create_variable("expiryDate", VariableType.DATE, None, "Expiry date"),
    )


def _inventory() -> Tuple[VariableDefinition, ...]:
    return (
        create_variable("itemCode", VariableType.TEXT, "ITM-001", "Item code"),
        create_variable("itemName", VariableType.TEXT, "Inventory Item", "Item name"),
        create_variable("location", VariableType.TEXT, "A1-B2-C3", "Storage location"),
        create_variable("quantity", VariableType.NUMBER, 100, "Item quantity"),
        create_variable("binLocation", VariableType.TEXT, "BIN-A001", "Bin location"),
        create_variable("lastUpdated", VariableType.DATE, None, "Last inventory update"),
        create_variable("reorderPoint", VariableType.NUMBER, 25, "Reorder point quantity"),
    )


def _asset() -> Tuple[VariableDefinition, ...]:
    return (
        create_variable("assetTag", VariableType.TEXT, "ASSET-001", "Asset tag number"),
        create_variable("assetName", VariableType.TEXT, "Equipment Name", "Asset name"),
        create_variable("serialNumber", VariableType.TEXT, "SN123456", "Serial number"),
        create_variable("purchaseDate", VariableType.DATE, None, "Purchase date"),
        create_variable("warrantyExpiry", VariableType.DATE, None, "Warranty expiry"),
        create_variable("department", VariableType.TEXT, "IT", "Department"),
        create_variable("responsible", VariableType.TEXT, "John Smith", "Responsible person"),
    )


_PRESETS: Dict[str, Callable[[], Tuple[VariableDefinition, ...]]] = {
    "shipping": _shipping,
    "product": _product,
    "inventory": _inventory,
    "asset": _asset,
}


def list_presets() -> Iterable[str]:
    """Return the available preset names."""

    return sorted(_PRESETS.keys())


@lru_cache(maxsize=None)
def get_preset(name: str) -> Tuple[VariableDefinition, ...]:
    """Return the variable definitions of a preset by name."""

    try:
        factory = _PRESETS[name]
    except KeyError as exc:
        options = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset '{name}'. Available presets: {options}") from exc
    return factory()
