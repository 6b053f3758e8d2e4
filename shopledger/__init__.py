"""ShopLedger: point-of-sale inventory accounting backend."""

__version__ = "1.0.0"
