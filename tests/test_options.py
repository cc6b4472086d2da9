import pytest

from xmrexplorer.options import CmdLineOptions, OptionsError


def test_defaults():
    opts = CmdLineOptions([])
    assert opts.get_option("port") == "8081"
    assert opts.get_option("bindaddr") == "0.0.0.0"
    assert opts.get_option("daemon-url") == "127.0.0.1:18081"
    assert opts.get_option("mempool-info-timeout") == "5000"
    assert opts.get_option("no-blocks-on-index") == "10"
    assert opts.get_option("concurrency") == 0
    assert opts.get_option("testnet") is False


def test_options_without_default_are_none():
    opts = CmdLineOptions([])
    assert opts.get_option("bc-path") is None
    assert opts.get_option("ssl-crt-file") is None
    assert opts.get_option("daemon-login") is None


def test_unknown_option_name_is_none():
    assert CmdLineOptions([]).get_option("no-such-option") is None


def test_implicit_true_flags():
    opts = CmdLineOptions(["-t", "--enable-json-api", "--enable-mixin-guess"])
    assert opts.get_option("testnet") is True
    assert opts.get_option("enable-json-api") is True
    assert opts.get_option("enable-mixin-guess") is True
    assert opts.get_option("stagenet") is False


def test_explicit_bool_values():
    opts = CmdLineOptions(["--enable-pusher=false", "--stagenet=1"])
    assert opts.get_option("enable-pusher") is False
    assert opts.get_option("stagenet") is True


def test_string_and_short_options(tmp_path):
    opts = CmdLineOptions(["-p", "9090", "-b", str(tmp_path), "-d", "node.example.com:18081"])
    assert opts.get_option("port") == "9090"
    assert opts.get_option("bc-path") == str(tmp_path)
    assert opts.get_option("daemon-url") == "node.example.com:18081"


def test_concurrency_parsed_as_int():
    assert CmdLineOptions(["-c", "4"]).get_option("concurrency") == 4


def test_negative_concurrency_rejected():
    with pytest.raises(OptionsError):
        CmdLineOptions(["--concurrency=-1"])


def test_unknown_argument_rejected():
    with pytest.raises(OptionsError):
        CmdLineOptions(["--no-such-flag"])


def test_positional_rejected():
    with pytest.raises(OptionsError):
        CmdLineOptions(["abcdef"])


def test_bad_bool_rejected():
    with pytest.raises(OptionsError):
        CmdLineOptions(["--testnet=maybe"])


def test_help_printed(capsys):
    opts = CmdLineOptions(["--help"])
    out = capsys.readouterr().out
    assert "Onion Monero Blockchain Explorer" in out
    assert "--daemon-url" in out
    assert opts.get_option("help") is True


def test_no_help_no_output(capsys):
    opts = CmdLineOptions([])
    assert capsys.readouterr().out == ""
    assert "--enable-emission-monitor" in opts.help_text()