"""Server-side price computation for catalog items."""
import logging
import math
from datetime import datetime
from typing import Any, Optional

from storefront.services.pricing.markup import range_markup, subscription_markup
from storefront.services.pricing.models import PriceQuote, SellerSubscription
from storefront.services.pricing.promotions import parse_promotion
from storefront.services.pricing.rounding import round_half_up
from storefront.services.pricing.units import conversion_factor, convert_quantity, normalize_unit

logger = logging.getLogger(__name__)

PERCENT_DISCOUNT_TYPES = ("%", "percent")
FLAT_DISCOUNT_TYPE = "flat"
OTHER_DISCOUNT_TYPE = "other"
DEFAULT_UNIT = "piece"


def as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None for anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def item_unit(item) -> Optional[str]:
    """Unit the item's base price is expressed in."""
    return getattr(item, "unit", None) or getattr(item, "weight_unit", None)


def reference_price(base_price: Any) -> float:
    """Price after the range markup, before subscription and discounts, rounded."""
    price = as_number(base_price) or 0.0
    return round_half_up(price + range_markup(price))


def apply_discount(
    price: float, discount_type: Any, discount_value: Any, name: Optional[str] = None
) -> float:
    """Apply a percent or flat discount; flat discounts never go below zero."""
    if discount_type not in PERCENT_DISCOUNT_TYPES and discount_type != FLAT_DISCOUNT_TYPE:
        return price

    value = as_number(discount_value)
    if value is None:
        logger.warning(f"Discount on {name!r} has no numeric value; ignoring")
        return price

    if discount_type in PERCENT_DISCOUNT_TYPES:
        return price * (1 - value / 100)
    return max(0.0, price - value)


class PricingEngine:
    """Computes unit price, chargeable quantity and subtotal for one item."""

    def quote(
        self,
        item,
        requested_quantity: float,
        requested_unit: Optional[str],
        subscription_active: bool,
        subscription_expiry: Optional[datetime],
        now: Optional[datetime] = None,
    ) -> PriceQuote:
        """
        Price a requested quantity of a catalog item.

        Steps run in a fixed order: range markup, subscription markup, unit
        conversion, "buy N get M" promotion, percent/flat discount. Malformed
        pricing metadata never raises; it simply has no effect.

        Args:
            item: Catalog item (any object exposing the catalog attributes)
            requested_quantity: Quantity requested by the customer
            requested_unit: Unit the quantity is expressed in
            subscription_active: Seller's subscribed flag
            subscription_expiry: Seller's subscription expiry
            now: Evaluation time, defaults to the current UTC time

        Returns:
            PriceQuote rounded for billing
        """
        name = getattr(item, "name", None)
        quantity = as_number(requested_quantity)
        if quantity is None:
            logger.warning(f"Non-numeric quantity {requested_quantity!r} for item {name!r}; treating as 0")
            quantity = 0.0

        price = as_number(getattr(item, "price", None))
        if price is None:
            logger.warning(f"Item {name!r} has no numeric price; treating as 0")
            price = 0.0

        # 1. Range markup
        increment = range_markup(price)
        if increment > 0:
            price += increment
            logger.debug(f"Range markup {increment} on {name!r}, price now {price:.2f}")

        # 2. Subscription markup, evaluated on the range-marked price
        subscription_applied = False
        subscription = SellerSubscription(
            has_subscribed=bool(subscription_active), expiry=subscription_expiry
        )
        if subscription.is_active(now):
            increment = subscription_markup(price)
            if increment > 0:
                price += increment
                subscription_applied = True
            logger.debug(f"Subscription markup {increment} on {name!r}, price now {price:.2f}")

        # 3. Unit conversion
        chargeable = quantity
        base_unit = normalize_unit(item_unit(item))
        wanted_unit = normalize_unit(requested_unit)
        if wanted_unit and base_unit and wanted_unit != base_unit:
            factor = conversion_factor(wanted_unit)
            if factor is not None:
                chargeable = quantity * factor

        # 4. "buy N get M" promotion
        discount_type = getattr(item, "discount_type", None)
        discount_text = getattr(item, "other_discount_text", None)
        if discount_type == OTHER_DISCOUNT_TYPE and discount_text:
            chargeable = self._apply_promotion(name, discount_text, quantity, wanted_unit, chargeable)

        # 5. Percent / flat discount on the marked-up price
        price = apply_discount(price, discount_type, getattr(item, "discount_value", None), name=name)

        subtotal = chargeable * price
        return PriceQuote(
            unit_price=round_half_up(price, 2),
            subtotal=round_half_up(subtotal, 2),
            chargeable_quantity=round_half_up(chargeable, 3),
            subscription_markup_applied=subscription_applied,
        )

    def _apply_promotion(
        self,
        name: Optional[str],
        text: str,
        quantity: float,
        requested_unit: Optional[str],
        chargeable: float,
    ) -> float:
        rule = parse_promotion(text)
        if rule is None:
            logger.debug(f"Unrecognised promotion {text!r} on {name!r}; ignoring")
            return chargeable

        converted = convert_quantity(quantity, requested_unit, rule.unit)
        if rule.buy_quantity > 0 and converted >= rule.buy_quantity:
            free_units = math.floor(converted / rule.buy_quantity) * rule.get_quantity
            # Free units come off the requested quantity, not the converted one
            chargeable = max(0.0, quantity - free_units)
            logger.debug(
                f"Applied 'buy {rule.buy_quantity} get {rule.get_quantity}' on {name!r}: "
                f"requested {quantity}, charging {chargeable}"
            )
        return chargeable

    def quote_for_seller(
        self,
        item,
        requested_quantity: float,
        requested_unit: Optional[str],
        seller,
        now: Optional[datetime] = None,
    ) -> PriceQuote:
        """Quote using the subscription state stored on a seller record."""
        subscription = SellerSubscription.from_seller(seller)
        return self.quote(
            item,
            requested_quantity,
            requested_unit,
            subscription.has_subscribed,
            subscription.expiry,
            now=now,
        )

    def displayed_price(self, item, seller, now: Optional[datetime] = None) -> float:
        """Unit price shown in the catalog: one unit in the item's own unit."""
        quote = self.quote_for_seller(item, 1, item_unit(item) or DEFAULT_UNIT, seller, now=now)
        return quote.unit_price
