"""
Domain service: Yield band selection.

Bands are scanned in the order they were configured for the product and
the first one covering the amount wins. Overlapping ranges are left as
they are.
"""

from decimal import Decimal

from app.domain.advisory.entities import Product, YieldBand
from app.domain.advisory.errors import NoApplicableRateError


def select_band(product: Product, amount: Decimal) -> YieldBand:
    """Return the first yield band of a product covering an amount.

    Args:
        product: Product whose bands are searched.
        amount: Amount to be invested.

    Returns:
        The matching YieldBand.

    Raises:
        NoApplicableRateError: If no band covers the amount.
    """
    for band in product.bands:
        if band.covers(amount):
            return band
    raise NoApplicableRateError(product.id, amount)
