"""Internal decode state machine for LAMMPS data files.

Private module; public API is in `lammps_data.py`.

States: EXPECT_TITLE -> IN_HEADER -> IN_BODY (irreversible).

- EXPECT_TITLE: the first line is the title, whether or not Title was requested.
- IN_HEADER: each line is offered to the unconsumed header Keys (Counter, Box)
  in Registry order; the first match decodes it and leaves the pool. Lines no
  header Key claims fall through to the body test.
- Body test (IN_HEADER and IN_BODY): the line is offered to the unconsumed
  table Keys; a match switches to IN_BODY and the table decodes its own body.
- Lines nobody claims (blank lines, comments, unsupported sections) are skipped.
"""

from __future__ import annotations

import enum
import logging

from lmpsdat.core.errors import DataFileError
from lmpsdat.core.names import TITLE
from lmpsdat.keys.base import Key, LineSource
from lmpsdat.keys.registry import Registry

logger = logging.getLogger(__name__)


class State(enum.Enum):
    EXPECT_TITLE = "expect_title"
    IN_HEADER = "in_header"
    IN_BODY = "in_body"


def _decode_first_match(line: str, pool: list[Key], source: LineSource) -> Key | None:
    """Decode `line` with the first Key of `pool` that claims it, and drop it from the pool."""
    for i, key in enumerate(pool):
        if not key.matches_header(line):
            continue
        logger.debug("line %d: matched %r", source.line_no, key.name)
        del pool[i]
        try:
            key.decode(line, source)
        except DataFileError as e:
            if e.line_no is None:
                e.line_no = source.line_no
            raise e.attach(key.name)
        return key
    return None


def run(registry: Registry, source: LineSource) -> State:
    """Fill `registry` from `source`. Returns the final state."""
    header_pool: list[Key] = registry.header_keys()
    body_pool: list[Key] = list(registry.table_keys())

    state = State.EXPECT_TITLE
    for line in source:
        if state is State.EXPECT_TITLE:
            title = registry.get(TITLE)
            if title is not None:
                title.decode(line, source)
            state = State.IN_HEADER
            continue

        if state is State.IN_HEADER and _decode_first_match(line, header_pool, source) is not None:
            continue

        if _decode_first_match(line, body_pool, source) is not None:
            state = State.IN_BODY

    if body_pool:
        logger.debug("sections not found: %s", [k.name for k in body_pool])
    return state
