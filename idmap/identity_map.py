"""
The identity map makes sure that the same record is not loaded twice within an
execution context: while it's enabled, finding a record by type and id that was already
loaded returns the very same object. See
http://www.martinfowler.com/eaaCatalog/identityMap.html

The map is off by default. Turn it on or off for the current context with
set_enabled(), or run some code with it temporarily on or off with use() and
without().

Records are stored per repository key (the root of their type hierarchy), so a Dog
cached under Animal can be found by asking for either Dog or Animal, but not Cat.
"""


import logging
from contextvars import ContextVar

from idmap.stats import new_identity_map_stats
from idmap import scope_flag, repository, hierarchy


_stats = ContextVar( 'identity_map_stats', default = None )

_logger = logging.getLogger( __name__ )


def is_enabled():
    return scope_flag.get()


def set_enabled( value ):
    scope_flag.set( value )


def use( body, *args, **kwargs ):
    """Run body with the identity map enabled, then restore the previous setting.
    Returns body's result.
    """

    return scope_flag.enable_during( body, *args, **kwargs )


def without( body, *args, **kwargs ):
    """Run body with the identity map disabled, then restore the previous setting.
    Returns body's result.
    """

    return scope_flag.disable_during( body, *args, **kwargs )


def get( cls, *ids ):
    """Get one or more records from the map. With a single id, return the record or
    None. With several ids (or a list or tuple of them), return a list of the records
    found, in the order requested.

    :param type cls: The record type requested.
    """

    ids = _flatten( ids )

    if len( ids ) == 0:
        raise ValueError( 'Must have at least one ID.' )

    if len( ids ) == 1:
        return get_one( cls, ids[ 0 ] )

    return get_many( cls, ids )


def get_one( cls, id ):
    """Return the record of type cls (or one of its descendants) with this id, or None
    if it's not in the map.

    :param type cls: The record type requested.
    :param id: The record's id.
    """

    record = repository.bucket_for( hierarchy.repository_key_of( cls ) ).get( id )

    if record is not None and hierarchy.matches( cls, type( record ) ):
        _logger.debug( 'Identity map hit: {} {}.'.format( cls.__name__, id ) )
        stats().increment( 'hits' )
        return record

    if record is not None:
        _logger.debug( 'Identity map holds {!r}, which is not a {}.'.format(
            record, cls.__name__ ) )

    stats().increment( 'misses' )
    return None


def get_many( cls, ids ):
    """Return the records found in the map for these ids, in order. Misses are left out,
    so the result may be shorter than ids.

    :param type cls: The record type requested.
    :param list ids: The ids to look up. Must not be empty.
    """

    if not ids:
        raise ValueError( 'Must have at least one ID.' )

    records = [ get_one( cls, id ) for id in ids ]
    return [ record for record in records if record is not None ]


def add( record ):
    """Put record in the map, replacing any record already stored for its repository key
    and id. Does nothing for None. Returns record.
    """

    if record is None:
        return None

    bucket = repository.bucket_for( hierarchy.repository_key_of( type( record ) ) )
    if bucket.get( record.id ) is not record:
        bucket[ record.id ] = record
        stats().increment( 'added' )

    return record


def remove( record ):
    remove_by_id( type( record ), record.id )


def remove_by_id( cls, id ):
    if id is None:
        _logger.warning( 'Attempted to remove a {} without an id from the identity '
            'map.'.format( cls.__name__ ) )
        return

    key = hierarchy.repository_key_of( cls )
    if id in repository.bucket_for( key ):
        repository.delete( key, id )
        stats().increment( 'removed' )
        _logger.debug( 'Removed {} {} from identity map.'.format( cls.__name__, id ) )


def clear():
    repository.clear()


def reset():
    """Start over for the current context: disable the map and give the context a new,
    empty repository and new stats. Integration code should call this wherever one
    logical scope ends and another begins in the same thread or task (for example, a
    pooled worker thread picking up a new request).
    """

    scope_flag.set( False )
    repository.new_scope()
    _stats.set( ( repository.owner(), new_identity_map_stats() ) )
    _logger.debug( 'Identity map reset for current context.' )


def configure( settings ):
    """Apply identity map settings from configuration to the current context.

    :param dict settings: The identity_map section of the configuration (may be None).
    """

    settings = settings or {}
    enabled = settings.get( 'enabled', False )

    if not isinstance( enabled, bool ):
        raise ValueError( 'identity_map.enabled must be true or false, not {!r}'.format(
            enabled ) )

    set_enabled( enabled )


def stats():
    """Return the StatCollection of the current context. Like the repository, stats
    inherited from another task or thread are not reused.
    """

    current_owner = repository.owner()
    entry = _stats.get()

    if entry is None or entry[ 0 ] != current_owner:
        entry = ( current_owner, new_identity_map_stats() )
        _stats.set( entry )

    return entry[ 1 ]


def _flatten( ids ):
    flat = []
    for id in ids:
        if isinstance( id, ( list, tuple ) ):
            flat.extend( _flatten( id ) )
        else:
            flat.append( id )

    return flat
