from .saved_items_service import (
    configure_saved_items_service,
    delete_saved_items,
    get_saved_items,
    put_saved_items,
)

__all__ = [
    "configure_saved_items_service",
    "delete_saved_items",
    "get_saved_items",
    "put_saved_items",
]
