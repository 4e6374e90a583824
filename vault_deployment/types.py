import click
from eth_utils import to_checksum_address

from vault_deployment.constants import MAX_UINT256


class MinInt(click.ParamType):
    name = "minint"

    def __init__(self, min_value, max_value=None):
        self.min_value = min_value
        self.max_value = max_value

    def convert(self, value, param, ctx):
        try:
            ivalue = int(value)
        except ValueError:
            self.fail(f"{value} is not a valid integer", param, ctx)
        if ivalue < self.min_value:
            self.fail(
                f"{value} is less than the minimum allowed value of {self.min_value}", param, ctx
            )
        if self.max_value is not None and ivalue > self.max_value:
            self.fail(
                f"{value} is greater than the maximum allowed value of {self.max_value}",
                param,
                ctx,
            )
        return ivalue


class Uint256(MinInt):
    """An unsigned 256-bit integer; 'max' stands for 2**256 - 1."""

    name = "uint256"
    MAX_KEYWORD = "max"

    def __init__(self):
        super().__init__(min_value=0, max_value=MAX_UINT256)

    def convert(self, value, param, ctx):
        if isinstance(value, str) and value.lower().strip() == self.MAX_KEYWORD:
            return MAX_UINT256
        return super().convert(value, param, ctx)


class ChecksumAddress(click.ParamType):
    name = "checksum_address"

    def convert(self, value, param, ctx):
        try:
            value = to_checksum_address(value=value)
        except ValueError:
            self.fail(f"Invalid ethereum address: {value}", param, ctx)
        else:
            return value
