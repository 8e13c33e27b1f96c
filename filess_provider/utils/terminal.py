"""
Direct operator notifications written to the controlling terminal.

Messages are written straight to the terminal device instead of going
through logging, so they show up even when log output is hidden. When no
terminal is available the write is skipped.
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_TTY_PATH = "/dev/tty"


def format_payment_banner(url: str) -> str:
    """Build the payment-required banner for a Stripe checkout URL."""
    return (
        "\n"
        "╔════════════════════════════════════════════════════════════╗\n"
        "║  ⚠️  PAYMENT REQUIRED                                      ║\n"
        "╚════════════════════════════════════════════════════════════╝\n"
        "\n"
        "The database requires payment to continue provisioning.\n"
        "Please open this URL to complete the Stripe checkout:\n"
        "\n"
        f"  {url}\n"
        "\n"
        "Waiting for payment completion...\n"
        "\n"
    )


def write_to_tty(text: str, tty_path: str = DEFAULT_TTY_PATH) -> bool:
    """
    Write text to the terminal device, unbuffered.

    Returns:
        True if written, False if the device could not be opened
    """
    try:
        with open(tty_path, "w", encoding="utf-8", buffering=1) as tty:
            tty.write(text)
            tty.flush()
    except OSError as e:
        logger.debug(f"Terminal {tty_path} not available, skipping direct notification: {e}")
        return False
    return True


def notify_payment_required(url: str, tty_path: str = DEFAULT_TTY_PATH) -> bool:
    """Show the payment-required banner on the operator's terminal."""
    return write_to_tty(format_payment_banner(url), tty_path)
