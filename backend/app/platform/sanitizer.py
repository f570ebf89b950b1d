import re

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w.-]+\.\w+")
_SQL_PARAMS_RE = re.compile(r"\[parameters: [^\n]*\]")
_PHONE_RE = re.compile(r"(?<![\w:-])\+?\(?\d[\d\s().-]{5,}\d(?![\w:-])")
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_SECRET_RE = re.compile(
    r'(password|passwd|pwd|secret|email_pass)["\']?\s*[:=]\s*["\']?[^"\'&\s]+',
    flags=re.IGNORECASE,
)


def _mask_phone(match: re.Match) -> str:
    value = match.group()
    if _ISO_DATE_RE.fullmatch(value.strip()) or sum(ch.isdigit() for ch in value) < 7:
        return value
    return "***" + value[-2:]


def redact_pii(message: str) -> str:
    """Mask personal data before it reaches a log handler.

    Emails keep their first character and domain, phone-like digit runs keep
    their last two digits, SQL bound parameters are dropped, and
    password-style ``key=value`` pairs lose the value entirely.
    """
    if not isinstance(message, str):
        return str(message)

    message = _SQL_PARAMS_RE.sub("[parameters: REDACTED]", message)
    message = _EMAIL_RE.sub(lambda m: m.group()[0] + "***@" + m.group().split("@")[1], message)
    message = _PHONE_RE.sub(_mask_phone, message)
    message = _SECRET_RE.sub(r"\1=[REDACTED]", message)
    return message
