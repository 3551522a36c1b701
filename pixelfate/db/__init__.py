from pixelfate.db.database import (
    build_engine,
    build_session_factory,
    drop_db,
    get_session,
    init_db,
)
from pixelfate.db.operations import (
    delete_player_state,
    get_state_row,
    read_state_blob,
    write_state_blob,
)

__all__ = [
    "build_engine",
    "build_session_factory",
    "delete_player_state",
    "drop_db",
    "get_session",
    "get_state_row",
    "init_db",
    "read_state_blob",
    "write_state_blob",
]
