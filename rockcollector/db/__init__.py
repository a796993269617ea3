from rockcollector.db.database import get_session, init_db
from rockcollector.db.operations import delete_save, get_save_record, load_save, store_save

__all__ = [
    "delete_save",
    "get_save_record",
    "get_session",
    "init_db",
    "load_save",
    "store_save",
]
