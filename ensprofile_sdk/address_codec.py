"""
Address formats keyed by SLIP-44 / ENSIP-11 coin type.

A resolver stores every coin address as raw bytes (for UTXO chains, the
output script). The registry turns those bytes back into the string users
expect for a given coin, and tells unsupported coin types apart from bytes
that a known format cannot render.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

import base58
from bech32 import encode as segwit_encode
from eth_utils import to_checksum_address

from .exceptions import AddressDecodeError, UnsupportedCoinTypeError

# ENSIP-11: coin types for EVM chains are the chain id with the MSB set
EVM_COIN_TYPE_FLAG = 0x80000000

CoinType = Union[int, str]


def evm_coin_type(chain_id: int) -> int:
    """Return the ENSIP-11 coin type for an EVM chain id."""
    return EVM_COIN_TYPE_FLAG | chain_id


@dataclass(frozen=True)
class CoinFormat:
    """
    Address format for one coin type.

    Attributes:
        coin_type: Decimal coin type string
        name: Ticker-style coin name reported on resolved records
        encoder: Turns raw resolver bytes into a display address
    """
    coin_type: str
    name: str
    encoder: Callable[[bytes], str]

    def encode(self, raw: bytes) -> str:
        return self.encoder(raw)


def encode_evm_address(raw: bytes) -> str:
    """EIP-55 checksummed hex address."""
    if len(raw) != 20:
        raise AddressDecodeError(f"EVM address must be 20 bytes, got {len(raw)}")
    return to_checksum_address("0x" + raw.hex())


def decode_witness_script(raw: bytes) -> Optional[Tuple[int, bytes]]:
    """Split a segwit output script into (witness version, program), or None."""
    if len(raw) < 4 or len(raw) > 42:
        return None
    opcode, push = raw[0], raw[1]
    if opcode != 0x00 and not 0x51 <= opcode <= 0x60:
        return None
    if push != len(raw) - 2:
        return None
    version = 0 if opcode == 0x00 else opcode - 0x50
    return version, raw[2:]


def make_base58_script_encoder(
    p2pkh_version: int,
    p2sh_version: int,
    hrp: Optional[str] = None
) -> Callable[[bytes], str]:
    """
    Build an encoder for Bitcoin-style output scripts.

    Pay-to-pubkey-hash and pay-to-script-hash scripts are rendered in
    base58check. When ``hrp`` is given, witness scripts are rendered as
    bech32 (version 0) or bech32m (version 1 and up) addresses.
    """
    def encode(raw: bytes) -> str:
        # OP_DUP OP_HASH160 <20> OP_EQUALVERIFY OP_CHECKSIG
        if len(raw) == 25 and raw[:3] == b"\x76\xa9\x14" and raw[23:] == b"\x88\xac":
            return base58.b58encode_check(bytes([p2pkh_version]) + raw[3:23]).decode()
        # OP_HASH160 <20> OP_EQUAL
        if len(raw) == 23 and raw[:2] == b"\xa9\x14" and raw[22:] == b"\x87":
            return base58.b58encode_check(bytes([p2sh_version]) + raw[2:22]).decode()
        witness = decode_witness_script(raw) if hrp else None
        if witness is not None:
            address = segwit_encode(hrp, witness[0], witness[1])
            if address is not None:
                return address
        raise AddressDecodeError(f"Unrecognised output script: 0x{raw.hex()}")

    return encode


def encode_solana_address(raw: bytes) -> str:
    if len(raw) != 32:
        raise AddressDecodeError(f"Solana address must be 32 bytes, got {len(raw)}")
    return base58.b58encode(raw).decode()


class CodecRegistry:
    """
    Registry of address formats.

    Lookups are keyed by the decimal coin type string so that keys from
    call descriptors can be used directly.
    """

    def __init__(self, formats: Optional[Iterable[CoinFormat]] = None):
        self._formats: Dict[str, CoinFormat] = {}
        for fmt in formats or ():
            self.register(fmt)

    def register(self, fmt: CoinFormat) -> None:
        """Add or replace the format for ``fmt.coin_type``."""
        self._formats[str(int(fmt.coin_type))] = fmt

    def supports(self, coin_type: CoinType) -> bool:
        return str(coin_type) in self._formats

    def get(self, coin_type: CoinType) -> CoinFormat:
        """
        Get the format for a coin type.

        Raises:
            UnsupportedCoinTypeError: If nothing is registered for it
        """
        fmt = self._formats.get(str(coin_type))
        if fmt is None:
            raise UnsupportedCoinTypeError(str(coin_type))
        return fmt

    def encode(self, coin_type: CoinType, raw: bytes) -> str:
        """
        Format raw resolver bytes for a coin type.

        Raises:
            UnsupportedCoinTypeError: If nothing is registered for the coin type
            AddressDecodeError: If the registered format rejects the bytes
        """
        return self.get(coin_type).encode(raw)


EVM_CHAINS = {
    10: "OP",
    137: "MATIC",
    8453: "BASE",
    42161: "ARB1",
}


def default_registry() -> CodecRegistry:
    """Registry with the built-in coin formats."""
    formats = [
        CoinFormat("0", "BTC", make_base58_script_encoder(0x00, 0x05, hrp="bc")),
        CoinFormat("2", "LTC", make_base58_script_encoder(0x30, 0x32, hrp="ltc")),
        CoinFormat("3", "DOGE", make_base58_script_encoder(0x1E, 0x16)),
        CoinFormat("60", "ETH", encode_evm_address),
        CoinFormat("61", "ETC", encode_evm_address),
        CoinFormat("501", "SOL", encode_solana_address),
    ]
    for chain_id, name in EVM_CHAINS.items():
        formats.append(CoinFormat(str(evm_coin_type(chain_id)), name, encode_evm_address))
    return CodecRegistry(formats)
