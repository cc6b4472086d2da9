# xmrexplorer

Building blocks for a Monero blockchain explorer: the explorer's
command-line options, a background monitor that sums the total coin
emission block by block, summaries of transactions given as JSON,
RandomX seed heights, and formatting helpers used by explorer pages.
The package uses only the standard library.

## Modules

| Module | Purpose |
| --- | --- |
| `xmrexplorer.options` | `CmdLineOptions`: the explorer's command-line options with their defaults |
| `xmrexplorer.emission` | `Emission`, `BlockSource` and `EmissionMonitor`, which sums coinbase and fees and saves the result to a file |
| `xmrexplorer.txjson` | `TxSummary` and sums of inputs, outputs and ring sizes for transactions in JSON form |
| `xmrexplorer.seedheight` | `rx_seedheight`, `rx_seedheights` and `SeedSlots` with reorganisation handling |
| `xmrexplorer.textutils` | amount and timestamp formatting, URL decoding, form parsing and other helpers |

## Examples

Command-line options (`argv` without the program name; `--help` prints
the help text):

```python
from xmrexplorer.options import CmdLineOptions

opts = CmdLineOptions(["--port", "8082", "--enable-json-api"])
opts.get_option("port")             # "8082"
opts.get_option("enable-json-api")  # True
opts.get_option("daemon-url")       # "127.0.0.1:18081"
opts.get_option("bc-path")          # None
```

Summing a transaction given as JSON text or as a dict:

```python
from xmrexplorer.txjson import summary_of_in_out_rct, get_mixin_no

tx = {
    "vin": [{"key": {"amount": 0, "key_offsets": [1, 2, 3]}}],
    "vout": [{"amount": 5}, {"amount": 7}],
}
summary_of_in_out_rct(tx)
# TxSummary(xmr_outputs=12, xmr_inputs=0, no_outputs=2, no_inputs=1,
#           mixin_no=2, num_nonrct_inputs=0)
get_mixin_no(tx)  # [3]
```

Malformed transactions, and ones without inputs where a ring size is
needed, raise `ValueError`.

Seed heights:

```python
from xmrexplorer.seedheight import rx_seedheight, rx_seedheights, SeedSlots

rx_seedheight(2000)                 # 0
seed, following = rx_seedheights(5000)

slots = SeedSlots()
slots.set_height(0, 4096)
slots.reorg(3000)
slots[0]                            # 1, marked invalid
```

Formatting helpers:

```python
from xmrexplorer.textutils import (
    xmr_amount_to_str, timestamp_difference, url_decode, parse_post_data,
)

xmr_amount_to_str(1500000000000, "{:0.3f}")  # "1.500"
xmr_amount_to_str(0)                         # "?"
timestamp_difference(100, 3761)              # (0, 0, 1, 1, 1)
url_decode("a%20b+c")                        # "a b c"
parse_post_data("a=1&b=2")                   # {"a": "1", "b": "2"}
```

## Emission monitoring

`EmissionMonitor` reads blocks through a `BlockSource`, which you
implement: `height()` returns the chain height and `block_amounts(height)`
returns the miner transaction's output total and the fees of the block's
transactions.

```python
from xmrexplorer.emission import BlockSource, EmissionMonitor

class MySource(BlockSource):
    def height(self):
        ...
    def block_amounts(self, height):
        ...

monitor = EmissionMonitor(MySource(), "emission_amount.txt")
monitor.start()            # loads a saved emission, then scans in a thread
total = monitor.get_emission()
monitor.stop()
```

The top `chunk_gap` blocks (3 by default) are never saved; `get_emission`
adds them in flight. Saved records are one line of
`block,coinbase,fee,checksum`, the checksum being the sum of the other
three; `Emission.parse` reads such a line back and raises
`EmissionFileError` when it is malformed or the checksum does not match.
`start` raises the same error when a saved file is corrupted.

## What the package does not do

It has no command to run, no web server and no pages. It does not talk
to a Monero daemon, does not read the blockchain database, and does not
watch the mempool: block data for the emission monitor comes from the
`BlockSource` you supply.

## Tests

The test suite uses pytest, available through the `test` extra.