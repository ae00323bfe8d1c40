"""Index bootstrap for the users collection."""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an existing one that clashes with it.

    An older deployment may already carry a plain (non-unique) email index or
    the same keys under a driver-generated name such as ``email_1``; either
    blocks creation and is dropped so the requested index can take its place.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _replace_clashing_index(collection, keys, name, **kwargs)


def _replace_clashing_index(collection, keys: list, name: str, **kwargs) -> bool:
    wanted_keys = dict(keys)
    wanted_unique = kwargs.get('unique', False)

    for existing, info in collection.index_information().items():
        if existing == '_id_':
            continue

        matches_keys = dict(info.get('key', [])) == wanted_keys
        matches_unique = info.get('unique', False) == wanted_unique
        renamed = matches_keys and existing != name
        redefined = existing == name and not (matches_keys and matches_unique)
        if not (renamed or redefined):
            continue

        logger.warning("Replacing index", extra={"index": existing, "replacement": name})
        collection.drop_index(existing)
        collection.create_index(keys, name=name, **kwargs)
        return True

    logger.error("No clashing index found", extra={"index": name})
    return False


def ensure_all_indexes(db) -> bool:
    """Create every index the service relies on; run at startup and by scripts.init_database."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
