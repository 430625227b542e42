"""Opaque string identifiers generated at creation time."""
import random
import string
import time
import uuid

_BASE36 = string.digits + string.ascii_lowercase


def new_uuid() -> str:
    return str(uuid.uuid4())


def new_employee_id() -> str:
    """``emp_<milliseconds>_<9 random base36 chars>``"""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"emp_{int(time.time() * 1000)}_{suffix}"
