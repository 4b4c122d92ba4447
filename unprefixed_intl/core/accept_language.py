from __future__ import annotations

from typing import List, Optional, Tuple


def parse_accept_language(header: Optional[str], limit: Optional[int] = None) -> List[str]:
    """Turn an ``Accept-Language`` header into codes ordered by preference.

    ``"fr-CH, fr;q=0.9, en;q=0.8, *;q=0.5"`` -> ``["fr-CH", "fr", "en"]``.
    Entries with ``q=0``, a malformed or out of range weight or the ``*``
    wildcard are dropped; equal weights keep header order. ``limit`` of
    ``None`` or ``<= 0`` keeps every code.
    """
    if not header:
        return []
    weighted: List[Tuple[float, str]] = []
    for part in header.split(","):
        code, _, params = part.strip().partition(";")
        code = code.strip()
        if not code or code == "*":
            continue
        q = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        # qvalues are 0..1; also rejects nan and inf
        if not 0 < q <= 1:
            continue
        weighted.append((q, code))
    weighted.sort(key=lambda item: item[0], reverse=True)
    codes = [code for _, code in weighted]
    if limit is not None and limit > 0:
        codes = codes[:limit]
    return codes
