"""lastUpdate timestamp formatting.

Records carry ``lastUpdate`` as a string of the form
``YYYY-MM-DD hh:mm:ss:mm`` computed from the local clock. The trailing
component is the millisecond count written in decimal, left-padded to two
digits and cut to its first two characters, so 5 ms gives ``05``, 50 ms
gives ``50`` and 123 ms gives ``12``. Existing clients compare these strings
byte for byte, so the format must not drift.
"""

from datetime import datetime


def format_last_update(moment: datetime | None = None) -> str:
    """Render ``moment`` (default: now, local time) as a lastUpdate token."""
    moment = moment or datetime.now()
    milliseconds = str(moment.microsecond // 1000).rjust(2, "0")[:2]
    return f"{moment:%Y-%m-%d %H:%M:%S}:{milliseconds}"
