import click
import pytest
from eth_utils import to_checksum_address

from vault_deployment.constants import MAX_UINT256
from vault_deployment.types import ChecksumAddress, MinInt, Uint256


def test_checksum_address_normalizes_case():
    address = "0x63AFF1c026b79f28990A8E81eEB8b5D4c306DB1B"
    converted = ChecksumAddress().convert(address.lower(), None, None)
    assert converted == to_checksum_address(address)
    assert converted.lower() == address.lower()


def test_checksum_address_rejects_garbage():
    with pytest.raises(click.BadParameter, match="Invalid ethereum address"):
        ChecksumAddress().convert("0xnotanaddress", None, None)


def test_min_int_bounds():
    fee = MinInt(0, 10_000)
    assert fee.convert("0", None, None) == 0
    assert fee.convert("10000", None, None) == 10_000

    with pytest.raises(click.BadParameter, match="less than the minimum"):
        fee.convert("-1", None, None)
    with pytest.raises(click.BadParameter, match="greater than the maximum"):
        fee.convert("10001", None, None)
    with pytest.raises(click.BadParameter, match="not a valid integer"):
        fee.convert("one", None, None)


def test_min_int_without_upper_bound():
    assert MinInt(1).convert(str(2**300), None, None) == 2**300


def test_uint256_accepts_max_keyword():
    uint = Uint256()
    assert uint.convert("max", None, None) == MAX_UINT256
    assert uint.convert(" MAX ", None, None) == MAX_UINT256
    assert uint.convert(str(MAX_UINT256), None, None) == MAX_UINT256
    assert uint.convert("1000", None, None) == 1000

    with pytest.raises(click.BadParameter):
        uint.convert(str(MAX_UINT256 + 1), None, None)
    with pytest.raises(click.BadParameter):
        uint.convert("-5", None, None)
