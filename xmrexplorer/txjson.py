"""Summaries of transactions given in their JSON form."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union

TxJson = Union[str, bytes, bytearray, Mapping[str, Any]]


@dataclass(frozen=True)
class TxSummary:
    """Money and counts of a transaction's inputs and outputs."""

    xmr_outputs: int
    xmr_inputs: int
    no_outputs: int
    no_inputs: int
    mixin_no: int
    num_nonrct_inputs: int


def _load(tx: TxJson) -> Mapping[str, Any]:
    """Return the transaction as a mapping, parsing JSON text if needed.

    Raises ValueError when the text is not JSON or not a JSON object.
    """
    if isinstance(tx, (str, bytes, bytearray)):
        data = json.loads(tx)
    else:
        data = tx
    if not isinstance(data, Mapping):
        raise ValueError("transaction JSON must be an object")
    return data


def _entries(tx: Mapping[str, Any], key: str) -> list[Any]:
    value = tx.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key!r} must be a list")
    return value


def _amount(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"invalid amount: {value!r}")
    return value


def _input_amounts(tx: Mapping[str, Any]) -> Iterator[int]:
    for vin in _entries(tx, "vin"):
        try:
            yield _amount(vin["key"]["amount"])
        except (KeyError, TypeError) as exc:
            raise ValueError(f"input without key amount: {vin!r}") from exc


def _output_amounts(tx: Mapping[str, Any]) -> Iterator[int]:
    for vout in _entries(tx, "vout"):
        try:
            yield _amount(vout["amount"])
        except (KeyError, TypeError) as exc:
            raise ValueError(f"output without amount: {vout!r}") from exc


def _first_ring_size(tx: Mapping[str, Any]) -> int:
    inputs = _entries(tx, "vin")
    if not inputs:
        raise ValueError("transaction has no inputs")
    try:
        offsets = inputs[0]["key"]["key_offsets"]
    except (KeyError, TypeError) as exc:
        raise ValueError("first input has no key offsets") from exc
    if not isinstance(offsets, list):
        raise ValueError("key offsets must be a list")
    return len(offsets)


def sum_money_in_outputs(tx: TxJson) -> tuple[int, int]:
    """Return (total amount, number) of the outputs."""
    amounts = list(_output_amounts(_load(tx)))
    return sum(amounts), len(amounts)


def sum_money_in_inputs(tx: TxJson) -> tuple[int, int]:
    """Return (total amount, number) of the inputs."""
    amounts = list(_input_amounts(_load(tx)))
    return sum(amounts), len(amounts)


def count_nonrct_inputs(tx: TxJson) -> int:
    """Count the inputs that carry a visible, non-zero amount."""
    return sum(1 for amount in _input_amounts(_load(tx)) if amount != 0)


def summary_of_in_out_rct(tx: TxJson) -> TxSummary:
    """Summarise a transaction; its mixin is the first ring's size less one.

    Raises ValueError when the transaction has no inputs.
    """
    data = _load(tx)
    outputs = list(_output_amounts(data))
    inputs = list(_input_amounts(data))
    return TxSummary(
        xmr_outputs=sum(outputs),
        xmr_inputs=sum(inputs),
        no_outputs=len(outputs),
        no_inputs=len(inputs),
        mixin_no=_first_ring_size(data) - 1,
        num_nonrct_inputs=sum(1 for amount in inputs if amount != 0),
    )


def get_mixin_no(tx: TxJson) -> list[int]:
    """Return a one-item list with the ring size of the first input.

    Raises ValueError when the transaction has no inputs.
    """
    return [_first_ring_size(_load(tx))]