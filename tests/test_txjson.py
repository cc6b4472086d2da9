import json

import pytest

from xmrexplorer.txjson import (
    TxSummary,
    count_nonrct_inputs,
    get_mixin_no,
    sum_money_in_inputs,
    sum_money_in_outputs,
    summary_of_in_out_rct,
)


def _tx(input_amounts, output_amounts, ring_size=11):
    return {
        "vin": [
            {"key": {"amount": amount, "key_offsets": list(range(ring_size)), "k_image": "ab"}}
            for amount in input_amounts
        ],
        "vout": [{"amount": amount, "target": {"key": "cd"}} for amount in output_amounts],
    }


def test_outputs_single_amount():
    assert sum_money_in_outputs(_tx([0], [5000])) == (5000, 1)


def test_outputs_accepts_json_text():
    tx = _tx([0, 0], [7, 9, 0])
    assert sum_money_in_outputs(json.dumps(tx)) == sum_money_in_outputs(tx)


def test_outputs_count_matches_given_outputs():
    amounts = [0, 0, 0, 0]
    total, count = sum_money_in_outputs(_tx([0], amounts))
    assert count == len(amounts)
    assert total == 0


def test_inputs_single_amount():
    assert sum_money_in_inputs(_tx([1234], [])) == (1234, 1)


def test_inputs_missing_vin_is_empty():
    assert sum_money_in_inputs({"vout": []}) == (0, 0)


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        sum_money_in_outputs("{not json")


def test_non_object_json_raises():
    with pytest.raises(ValueError):
        sum_money_in_inputs("[1, 2]")


def test_missing_amount_raises():
    with pytest.raises(ValueError):
        sum_money_in_outputs({"vout": [{"target": {}}]})


def test_count_nonrct_inputs_skips_zero_amounts():
    tx = _tx([0, 0, 42, 0], [1])
    assert count_nonrct_inputs(tx) == 1
    assert count_nonrct_inputs(json.dumps(tx)) == 1


def test_count_nonrct_all_rct():
    assert count_nonrct_inputs(_tx([0, 0, 0], [1])) == 0


def test_summary_mixin_is_ring_size_minus_one():
    tx = _tx([0, 0], [3, 4], ring_size=16)
    summary = summary_of_in_out_rct(tx)
    assert summary.mixin_no == get_mixin_no(tx)[0] - 1


def test_summary_consistent_with_other_helpers():
    tx = _tx([0, 100, 0], [10, 20], ring_size=4)
    summary = summary_of_in_out_rct(tx)
    assert isinstance(summary, TxSummary)
    assert (summary.xmr_outputs, summary.no_outputs) == sum_money_in_outputs(tx)
    assert (summary.xmr_inputs, summary.no_inputs) == sum_money_in_inputs(tx)
    assert summary.num_nonrct_inputs == count_nonrct_inputs(tx)


def test_summary_without_inputs_raises():
    with pytest.raises(ValueError):
        summary_of_in_out_rct(_tx([], [1]))


def test_get_mixin_no_returns_first_ring_size():
    tx = _tx([0], [1], ring_size=16)
    assert get_mixin_no(tx) == [16]
    assert get_mixin_no(json.dumps(tx)) == [16]


def test_get_mixin_no_without_inputs_raises():
    with pytest.raises(ValueError):
        get_mixin_no({"vin": [], "vout": []})


def test_negative_amount_rejected():
    with pytest.raises(ValueError):
        sum_money_in_inputs(_tx([-1], []))