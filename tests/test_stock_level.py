import pytest

from utils.stock_level import StockLevel, classify_stock, is_low_stock


@pytest.mark.parametrize(
    "quantity, level",
    [
        (0, StockLevel.OUT),
        (None, StockLevel.OUT),
        (1, StockLevel.SECONDARY),
        (10, StockLevel.SECONDARY),
        (11, StockLevel.AMPLE),
        (500, StockLevel.AMPLE),
    ],
)
def test_classify_stock(quantity, level):
    assert classify_stock(quantity) == level


@pytest.mark.parametrize("quantity, low", [(0, False), (1, True), (5, True), (6, False), (None, False)])
def test_low_stock_warning(quantity, low):
    assert is_low_stock(quantity) is low


def test_levels_serialise_as_plain_strings():
    assert StockLevel.AMPLE == "ample"
    assert [s.value for s in StockLevel] == ["ample", "secondary", "out"]
