import logging
import sys

from app.platform.logging import PIIRedactingFormatter
from app.platform.sanitizer import redact_pii


def test_redact_pii_masks_email_local_part():
    assert redact_pii("sent to jane.doe@example.com") == "sent to j***@example.com"


def test_redact_pii_masks_password_values():
    assert "hunter2" not in redact_pii("EMAIL_PASS=hunter2")


def test_formatter_redacts_args():
    formatter = PIIRedactingFormatter("%(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "Email sent to %s", ("jane@example.com",), None)

    assert formatter.format(record) == "Email sent to j***@example.com"


def test_redact_pii_masks_phone_numbers():
    assert redact_pii("phone=+1 (604) 555-0199") == "phone=***99"
    assert redact_pii("call 604-555-0199 today") == "call ***99 today"


def test_redact_pii_keeps_dates_and_short_numbers():
    message = "stored at 2026-10-19 09:05:00 message_len=41"

    assert redact_pii(message) == message


def test_redact_pii_drops_sql_parameters():
    message = "INSERT INTO contacts\n[parameters: ('id-1', 'Jane Doe', 'jane@example.com')]"

    assert "Jane Doe" not in redact_pii(message)


def test_formatter_redacts_tracebacks():
    formatter = PIIRedactingFormatter("%(message)s")
    try:
        raise ValueError("bad address jane.doe@example.com")
    except ValueError:
        record = logging.LogRecord("test", logging.ERROR, __file__, 1, "Insert failed", None, sys.exc_info())

    output = formatter.format(record)

    assert "Insert failed" in output
    assert "jane.doe@example.com" not in output
    assert "j***@example.com" in output


def test_formatter_leaves_the_original_record_untouched():
    formatter = PIIRedactingFormatter("%(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "Email sent to %s", ("jane@example.com",), None)

    formatter.format(record)

    assert record.args == ("jane@example.com",)
    assert record.getMessage() == "Email sent to jane@example.com"
