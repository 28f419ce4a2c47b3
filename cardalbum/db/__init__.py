from cardalbum.db.database import get_session, init_db
from cardalbum.db.operations import (
    card_from_dict,
    card_to_dict,
    delete_player_state,
    get_player_row,
    load_player_state,
    row_to_state,
    save_player_state,
)

__all__ = [
    "card_from_dict",
    "card_to_dict",
    "delete_player_state",
    "get_player_row",
    "get_session",
    "init_db",
    "load_player_state",
    "row_to_state",
    "save_player_state",
]
