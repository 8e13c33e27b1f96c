"""Tests for direct terminal notifications."""

from filess_provider.utils.terminal import (
    format_payment_banner,
    notify_payment_required,
    write_to_tty,
)

CHECKOUT_URL = "https://checkout.stripe.com/c/pay/cs_test_123"


def test_banner_contains_url():
    banner = format_payment_banner(CHECKOUT_URL)

    assert "PAYMENT REQUIRED" in banner
    assert f"  {CHECKOUT_URL}\n" in banner
    assert banner.startswith("\n╔")


def test_notify_writes_to_terminal_device(tmp_path):
    tty = tmp_path / "tty"
    tty.write_text("")

    assert notify_payment_required(CHECKOUT_URL, tty_path=str(tty)) is True
    assert CHECKOUT_URL in tty.read_text(encoding="utf-8")


def test_missing_terminal_is_skipped(tmp_path):
    missing = tmp_path / "no-such-dir" / "tty"

    assert write_to_tty("hello", tty_path=str(missing)) is False
