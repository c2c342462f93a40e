"""
Asset-Class Classifier

Routes a symbol to an asset class by substring matching on known tickers.
Checks run in order, so 'XAUUSD' matches forex (USD) before commodity.
"""

from app.schemas.market import AssetClass

CLASSIFICATION_RULES = (
    (AssetClass.CRYPTO, ("BTC", "ETH", "USDT")),
    (AssetClass.FOREX, ("USD", "EUR", "GBP")),
    (AssetClass.COMMODITY, ("XAU", "XAG", "OIL")),
)


def classify_asset_class(symbol: str) -> AssetClass:
    symbol = symbol.upper()
    for asset_class, markers in CLASSIFICATION_RULES:
        if any(marker in symbol for marker in markers):
            return asset_class
    return AssetClass.STOCK
