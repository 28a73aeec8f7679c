import pytest

from utils.barcode import ean13_check_digit, generate_barcode, is_valid_ean13


def test_check_digit_of_known_code():
    assert ean13_check_digit("400638133393") == 1
    assert is_valid_ean13("4006381333931")


def test_check_digit_is_zero_when_sum_is_multiple_of_ten():
    # 6+3+1+4+6 = 20
    assert ean13_check_digit("611000000042") == 0


def test_check_digit_rejects_bad_payload():
    with pytest.raises(ValueError):
        ean13_check_digit("12345678901")
    with pytest.raises(ValueError):
        ean13_check_digit("61100000004x")


@pytest.mark.parametrize("code", ["", "123", "4006381333932", "40063813339a1", "40063813339311"])
def test_invalid_codes(code):
    assert not is_valid_ean13(code)


def test_generated_codes_are_valid():
    for _ in range(500):
        code = generate_barcode()
        assert len(code) == 13
        assert code.isdigit()
        assert code.startswith("611")
        assert is_valid_ean13(code)


def test_small_body_is_zero_padded(monkeypatch):
    monkeypatch.setattr("utils.barcode.random.randrange", lambda n: 42)
    assert generate_barcode() == "6110000000420"


def test_custom_prefix():
    code = generate_barcode(prefix="590")
    assert code.startswith("590")
    assert is_valid_ean13(code)
