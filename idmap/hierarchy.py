"""Registry of record type hierarchies. Types are declared explicitly (usually by
idmap.record.Record as subclasses are defined), and the registry is used to find a
type's repository key and to decide whether a stored record satisfies a lookup.
"""


import logging


_parents = {}
_by_name = {}

_logger = logging.getLogger( __name__ )


def register( cls, parent = None ):
    """Declare a record type and, optionally, the record type it descends from.

    :param type cls: The record type.
    :param type parent: The parent record type, which must already be registered.
        None for the root of a hierarchy.
    """

    if parent is not None and parent not in _parents:
        raise ValueError( 'Parent type {} of {} is not registered.'.format(
            parent.__name__, cls.__name__ ) )

    if cls in _parents:
        if _parents[ cls ] is not parent:
            raise ValueError( 'Type {} is already registered with a different '
                'parent.'.format( cls.__name__ ) )
        return

    if cls.__name__ in _by_name:
        raise ValueError( 'A type named {} is already registered.'.format(
            cls.__name__ ) )

    _parents[ cls ] = parent
    _by_name[ cls.__name__ ] = cls
    _logger.debug( 'Registered record type {} (parent: {}).'.format( cls.__name__,
        parent.__name__ if parent else None ) )


def unregister( cls ):
    """Remove a type and all its descendants from the registry."""

    for descendant in descendants_of( cls ) + [ cls ]:
        _parents.pop( descendant, None )
        _by_name.pop( descendant.__name__, None )


def is_registered( cls ):
    return cls in _parents


def parent_of( cls ):
    return _parents.get( cls )


def ancestors_of( cls ):
    """Registered ancestors of cls, nearest first."""

    ancestors = []
    parent = _parents.get( cls )
    while parent is not None:
        ancestors.append( parent )
        parent = _parents.get( parent )

    return ancestors


def descendants_of( cls ):
    return [ t for t in _parents if cls in ancestors_of( t ) ]


def repository_key_of( cls ):
    """Return the root of cls's hierarchy. All the types in one hierarchy share this
    key, so their records are stored together. An unregistered type is its own key.

    :param type cls: A record type.
    """

    ancestors = ancestors_of( cls )
    return ancestors[ -1 ] if ancestors else cls


def matches( requested, actual ):
    """Can a record of type actual be returned for a lookup of type requested?

    :param type requested: The type the caller asked for.
    :param type actual: The type of the stored record.
    :returns bool
    """

    return actual is requested or requested in ancestors_of( actual )


def class_for_name( name ):
    """Return the registered type with this name, or None."""

    return _by_name.get( name )
