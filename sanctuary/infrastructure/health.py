# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from sqlalchemy import text

from sanctuary.infrastructure.db import ENGINE


def check_database() -> dict[str, object]:
    """Run a trivial query and report the round trip.

    Connection errors propagate to the caller.
    """
    started = time.perf_counter()
    with ENGINE.connect() as connection:
        connection.execute(text("SELECT 1"))
    return {
        "dialect": ENGINE.dialect.name,
        "latency_ms": round((time.perf_counter() - started) * 1000.0, 2),
    }


__all__ = ["check_database"]
