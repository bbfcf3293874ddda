import re

EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(val):
    return val.strip().lower()


def is_valid_email(val):
    return bool(EMAIL.match(val))
