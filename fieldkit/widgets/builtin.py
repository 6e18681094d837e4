# # Imports every builtin widget module so their factories are registered.

from . import boolean, list_items, number, object_fields, placeholder, select, text  # noqa: F401
