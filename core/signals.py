# core/signals.py
from django.db.backends.signals import connection_created
from django.dispatch import receiver

from core.query import fold_case


@receiver(connection_created)
def register_sqlite_lower(sender, connection, **kwargs):
    # SQLite's built-in LOWER() only folds ASCII letters.
    if connection.vendor == 'sqlite':
        connection.connection.create_function('LOWER', 1, fold_case, deterministic=True)
