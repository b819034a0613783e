# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
from typing import List

from ...domain.models import BlameEntry
from ...ports.consumer import BlameConsumerPort

logger = logging.getLogger(__name__)


class IntegrityBlameConsumer(BlameConsumerPort):
    """
    Parses `si annotate --fields=date,revision,author` output.

    Each annotated line is `date<TAB>revision<TAB>author`. Dates are kept as
    printed by the client (e.g. "Jun 12, 2013 CEST 9:42:17 AM").
    """

    def __init__(self) -> None:
        self._entries: List[BlameEntry] = []

    def consume_line(self, line: str) -> None:
        logger.debug("%s", line)
        if not line.strip():
            return
        tokens = line.split("\t")
        if len(tokens) != 3:
            logger.warning("Failed to parse line: %s", line)
            return
        date, revision, author = (t.strip() for t in tokens)
        self._entries.append(
            BlameEntry(
                line_number=len(self._entries) + 1,
                revision=revision,
                author=author,
                date=date,
            )
        )

    @property
    def entries(self) -> List[BlameEntry]:
        return list(self._entries)
