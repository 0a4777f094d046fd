from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from catalog_price.domain.monetary.currency_registry import CZK
from catalog_price.domain.price.price import Price
from catalog_price.presentation.price_view import PriceView


def test_view_exposes_price_amounts():
    view = Price(100, True, 21, CZK).to_view()
    assert view.with_tax == Decimal("100.00")
    assert view.without_tax == Decimal("82.64")
    assert view.tax == Decimal("17.36")
    assert view.tax_rate == Decimal("21")
    assert view.default == Decimal("100.00")
    assert view.currency is CZK
    assert view.is_price_from is False


def test_view_of_mixed_rate_price_has_no_rate():
    view = Price.sum_price(121, 21, CZK).to_view()
    assert view.tax_rate is None
    assert view.default == Decimal("100")


def test_to_dict_is_restricted_to_allowed_properties():
    view = Price(100, True, 21, CZK).to_view(is_price_from=True)
    context = view.to_dict()
    assert set(context) == set(PriceView.ALLOWED_PROPERTIES)
    assert "is_price_from" not in context
    assert context["with_tax"] == Decimal("100.00")
    assert PriceView.short_name == "price"


def test_is_price_from_marker():
    view = PriceView.from_price(Price(199, True, 21, CZK))
    marked = view.with_is_price_from(True)
    assert marked.is_price_from is True
    assert view.is_price_from is False
    assert marked.default == view.default


def test_view_is_read_only():
    view = Price(100, True, 21, CZK).to_view()
    with pytest.raises(FrozenInstanceError):
        view.with_tax = Decimal("1")


def test_view_renders_default_amount():
    view = Price(100, True, 21, CZK).to_view()
    assert str(view) == "100.00"
    assert float(view) == 100.0


def test_price_module_does_not_depend_on_presentation_at_import():
    import catalog_price.domain.price.price as price_module

    assert "PriceView" not in vars(price_module)
