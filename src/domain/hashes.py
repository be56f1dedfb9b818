from __future__ import annotations

from typing import Iterable, List, Union


MESSAGE_HASH_LENGTH = 32
TRANSACTION_ID_LENGTH = 32
# Transaction ID followed by a little-endian uint16 output index.
UTXO_INPUT_ID_LENGTH = TRANSACTION_ID_LENGTH + 2

HashLike = Union[bytes, bytearray, str]


def _to_hex(value: HashLike) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, str):
        # Malformed hex raises ValueError.
        return bytes.fromhex(value).hex()
    raise TypeError(f"expected bytes or hex string, got {type(value).__name__}")


def hashes_to_hex(hashes: Iterable[HashLike]) -> List[str]:
    """
    Hex encode message / transaction hashes for use in query strings.

    Items may be raw bytes or hex strings; hex strings are validated and
    lower-cased. Raises `ValueError` on malformed hex.
    """
    return [_to_hex(h) for h in hashes]


def utxo_input_id(transaction_id: bytes, output_index: int) -> bytes:
    """
    Build the 34 byte ID of a UTXO input from the transaction that created
    the output and the output's index within it.
    """
    if len(transaction_id) != TRANSACTION_ID_LENGTH:
        raise ValueError(
            f"transaction id must be {TRANSACTION_ID_LENGTH} bytes, got {len(transaction_id)}"
        )
    if not 0 <= output_index <= 0xFFFF:
        raise ValueError(f"output index out of range: {output_index}")
    return bytes(transaction_id) + output_index.to_bytes(2, "little")


def utxo_input_ids_to_hex(ids: Iterable[HashLike]) -> List[str]:
    """Hex encode UTXO input IDs, checking each is 34 bytes long."""
    out: List[str] = []
    for raw in ids:
        encoded = _to_hex(raw)
        if len(encoded) != UTXO_INPUT_ID_LENGTH * 2:
            raise ValueError(
                f"utxo input id must be {UTXO_INPUT_ID_LENGTH} bytes, got {len(encoded) // 2}"
            )
        out.append(encoded)
    return out
