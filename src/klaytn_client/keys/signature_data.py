"""
Signature value type and signature-list refinement.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Sequence, Union

from ..runtime.errors import InvalidInputError, ErrorCode
from ..runtime.hexutil import is_hex, add_hex_prefix, hex_to_bytes, bytes_to_hex


class SignatureData:
    """
    An ordered (v, r, s) triple of '0x' hex strings.

    The empty signature ('0x01', '0x', '0x') is the placeholder used by
    transactions that have not been signed yet.
    """

    def __init__(self, v: str = "0x01", r: str = "0x", s: str = "0x"):
        for name, value in (("v", v), ("r", r), ("s", s)):
            if not is_hex(value):
                raise InvalidInputError(f"Invalid signature {name}: {value}", ErrorCode.INVALID_HEX)
        self.v = add_hex_prefix(v).lower()
        self.r = add_hex_prefix(r).lower()
        self.s = add_hex_prefix(s).lower()

    @classmethod
    def empty(cls) -> SignatureData:
        return cls("0x01", "0x", "0x")

    @classmethod
    def from_value(cls, value: Union[SignatureData, Sequence[str]]) -> SignatureData:
        """Build from a SignatureData or a 3-element [v, r, s] sequence."""
        if isinstance(value, SignatureData):
            return value
        if isinstance(value, (list, tuple)) and len(value) == 3:
            return cls(*value)
        raise InvalidInputError(f"Invalid signature format: {value!r}", ErrorCode.INVALID_HEX)

    @classmethod
    def from_rlp(cls, items: Sequence[bytes]) -> SignatureData:
        """Build from a decoded RLP [v, r, s] list of byte strings."""
        if not isinstance(items, (list, tuple)) or len(items) != 3 or \
                not all(isinstance(item, bytes) for item in items):
            raise InvalidInputError("Invalid RLP signature: expected [v, r, s]", ErrorCode.DECODE_ERROR)
        return cls(*(bytes_to_hex(item) for item in items))

    def to_rlp(self) -> List[bytes]:
        return [hex_to_bytes(self.v), hex_to_bytes(self.r), hex_to_bytes(self.s)]

    def to_list(self) -> List[str]:
        return [self.v, self.r, self.s]

    def is_empty(self) -> bool:
        return self == SignatureData.empty()

    def to_bytes(self) -> bytes:
        """65-byte r || s || v form; v must fit in one byte."""
        v = hex_to_bytes(self.v)
        return hex_to_bytes(self.r).rjust(32, b"\x00") + hex_to_bytes(self.s).rjust(32, b"\x00") + v[-1:]

    def __iter__(self):
        return iter(self.to_list())

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SignatureData):
            return self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)) and len(other) == 3:
            try:
                return self == SignatureData(*other)
            except InvalidInputError:
                return False
        return False

    def __hash__(self) -> int:
        return hash((self.v, self.r, self.s))

    def __repr__(self) -> str:
        return f"SignatureData(v='{self.v}', r='{self.r}', s='{self.s}')"


def refine_signatures(signatures: Iterable[Any]) -> List[SignatureData]:
    """
    Normalize a signature list.

    Empty placeholder signatures and duplicates are dropped; order of the
    remaining signatures is kept. An empty result becomes [empty signature].
    """
    if isinstance(signatures, SignatureData):
        signatures = [signatures]
    elif isinstance(signatures, (list, tuple)) and len(signatures) == 3 and \
            all(isinstance(item, str) for item in signatures):
        # a single [v, r, s] triple
        signatures = [signatures]

    refined: List[SignatureData] = []
    for sig in signatures:
        sig = SignatureData.from_value(sig)
        if sig.is_empty() or sig in refined:
            continue
        refined.append(sig)
    return refined or [SignatureData.empty()]


__all__ = ["SignatureData", "refine_signatures"]
