"""Hooks connecting the identity map to a finder and to the record lifecycle. Each hook
takes the real operation as a callable and decides whether, and in what order, the map
is consulted or updated around it. Updates to a record are not tracked: the same
instance is mutated in place.
"""


import logging

from idmap import identity_map


_logger = logging.getLogger( __name__ )


def can_use_identity_map_with( options ):
    """May a find-by-id with these options be answered from the identity map? Not if
    the options restrict the fields returned (the result would be a partial object) or
    ask for a locking read (the caller needs the row's current state).

    :param dict options: Finder options.
    :returns bool
    """

    options = options or {}

    # Any select, even an empty one, restricts the fields fetched
    if options.get( 'select' ) is not None:
        return False

    return not options.get( 'lock' )


def find_one( cls, id, options, real_find ):
    """Find a record by id. If the identity map is enabled and the options allow it,
    return the mapped record if there is one; otherwise call real_find and add its
    result to the map. Errors from real_find propagate, and nothing is added.

    :param type cls: The record type requested.
    :param id: The record's id.
    :param dict options: Finder options.
    :param function real_find: Callable that actually fetches the record (or returns
        None).
    """

    if not ( identity_map.is_enabled() and can_use_identity_map_with( options ) ):
        return real_find()

    record = identity_map.get_one( cls, id )
    if record is not None:
        return record

    return identity_map.add( real_find() )


def loaded( record ):
    """To be called once a record has been built from a row freshly read from storage."""

    if identity_map.is_enabled():
        identity_map.add( record )


def create( record, real_create ):
    """Persist a new record with real_create, then add it to the map."""

    if not identity_map.is_enabled():
        return real_create()

    result = real_create()
    identity_map.add( record )
    return result


def reload( record, real_reload ):
    """Take record out of the map before real_reload re-reads its state, so the reload
    can't be answered with the mapped (stale) reference.
    """

    if identity_map.is_enabled():
        identity_map.remove( record )

    return real_reload()


def destroy( record, real_destroy ):
    """Destroy record with real_destroy and, only once that succeeds, take it out of the
    map. If real_destroy raises, the record stays mapped.
    """

    if not identity_map.is_enabled():
        return real_destroy()

    result = real_destroy()
    identity_map.remove( record )
    _logger.debug( 'Destroyed {!r}.'.format( record ) )
    return result


delete = destroy
