"""Identifiers carried by resume section entries.

An entry created on the client gets a ``Pending`` id until the backend stores
it; the backend hands back ``Persisted`` ids. The two spaces never mix: a
pending id is never sent to the server and a server id is never generated
locally.
"""
import threading
import time
from typing import Union

from pydantic import BaseModel, ConfigDict


class Pending(BaseModel):
    model_config = ConfigDict(frozen=True)

    local_id: int


class Persisted(BaseModel):
    model_config = ConfigDict(frozen=True)

    server_id: int


EntryId = Union[Pending, Persisted]

_lock = threading.Lock()
_last_local_id = 0


def new_pending_id() -> Pending:
    """Return a timestamp-derived placeholder id, strictly increasing within the process."""
    global _last_local_id
    with _lock:
        _last_local_id = max(int(time.time() * 1000), _last_local_id + 1)
        return Pending(local_id=_last_local_id)
