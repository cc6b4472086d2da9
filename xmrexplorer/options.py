"""Command line options of the explorer."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Any

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class OptionsError(ValueError):
    """Raised when the command line cannot be parsed."""


def _parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {text!r}")


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"value must not be negative: {text!r}")
    return value


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise OptionsError(message)


_FLAGS: list[tuple[tuple[str, ...], str]] = [
    (("-h", "--help"), "produce help message"),
    (("-t", "--testnet"), "use testnet blockchain"),
    (("-s", "--stagenet"), "use stagenet blockchain"),
    (("--enable-pusher",), "enable signed transaction pusher"),
    (("--enable-randomx",), "enable generation of randomx code"),
    (("--enable-mixin-details",),
     "enable mixin details for key images, e.g., timescale, mixin of mixins, in tx context"),
    (("--enable-key-image-checker",), "enable key images file checker"),
    (("--enable-output-key-checker",), "enable outputs key file checker"),
    (("--enable-json-api",), "enable JSON REST api"),
    (("--enable-as-hex",), "enable links to provide hex represtations of a tx and a block"),
    (("--enable-autorefresh-option",), "enable users to have the index page on autorefresh"),
    (("--enable-emission-monitor",), "enable Monero total emission monitoring thread"),
]

_STRINGS: list[tuple[tuple[str, ...], str | None, str]] = [
    (("-p", "--port"), "8081", "default explorer port"),
    (("-x", "--bindaddr"), "0.0.0.0", "default bind address for the explorer"),
    (("--testnet-url",), "",
     "you can specify testnet url, if you run it on mainnet or stagenet. "
     "link will show on front page to testnet explorer"),
    (("--stagenet-url",), "",
     "you can specify stagenet url, if you run it on mainnet or testnet. "
     "link will show on front page to stagenet explorer"),
    (("--mainnet-url",), "",
     "you can specify mainnet url, if you run it on testnet or stagenet. "
     "link will show on front page to mainnet explorer"),
    (("--no-blocks-on-index",), "10", "number of last blocks to be shown on index page"),
    (("--mempool-info-timeout",), "5000",
     "maximum time, in milliseconds, to wait for mempool data for the front page"),
    (("--mempool-refresh-time",), "5", "time, in seconds, for each refresh of mempool state"),
    (("-b", "--bc-path"), None,
     "path to lmdb folder of the blockchain, e.g., ~/.bitmonero/lmdb"),
    (("--ssl-crt-file",), None, "path to crt file for ssl (https) functionality"),
    (("--ssl-key-file",), None, "path to key file for ssl (https) functionality"),
    (("--daemon-login",), None, "Specify username[:password] for daemon RPC client"),
    (("-d", "--daemon-url"), "127.0.0.1:18081", "Monero daemon url"),
]


def _build_parser() -> _Parser:
    parser = _Parser(
        prog="xmrblocks",
        description="xmrblocks, Onion Monero Blockchain Explorer",
        add_help=False,
    )
    for names, help_text in _FLAGS:
        parser.add_argument(
            *names, nargs="?", const=True, default=False, type=_parse_bool, help=help_text
        )
    for names, default, help_text in _STRINGS:
        parser.add_argument(*names, default=default, help=help_text)
    parser.add_argument(
        "-c", "--concurrency", type=_non_negative_int, default=0,
        help="number of threads handling http queries. "
             "Default is 0 which means it is based you on the cpu",
    )
    parser.add_argument(
        "--enable-mixin-guess", nargs="?", const=True, default=False, type=_parse_bool,
        help="enable guessing real outputs in key images based on viewkey",
    )
    return parser


class CmdLineOptions:
    """Parsed command line options.

    ``argv`` holds the arguments without the program name; it defaults to
    ``sys.argv[1:]``. When ``--help`` is given the help text is printed.
    """

    def __init__(self, argv: Sequence[str] | None = None) -> None:
        self._parser = _build_parser()
        args = list(sys.argv[1:] if argv is None else argv)
        namespace = self._parser.parse_args(args)
        self._values: dict[str, Any] = vars(namespace)
        if self._values.get("help"):
            print(self.help_text())

    def get_option(self, name: str) -> Any:
        """Return the option's value, or None when it is neither given nor defaulted."""
        return self._values.get(name.lstrip("-").replace("-", "_"))

    def help_text(self) -> str:
        """Return the help message describing all options."""
        return self._parser.format_help()