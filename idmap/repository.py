"""Storage for the identity map: repository key (a hierarchy root class) ->
identifier -> record. One repository per execution context (asyncio task, or thread
when no task is running); no locking needed.
"""


import asyncio
import threading
from contextvars import ContextVar


# Holds ( owner, repository ). New tasks and threads may inherit a copy of the
# context, so the owner is checked before the repository is used.
_repository = ContextVar( 'identity_map_repository', default = None )


def owner():
    """Return the execution context that owns context-local identity map state: the
    running asyncio task, or else the current thread's id.
    """

    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None

    return task if task is not None else threading.get_ident()


def bucket_for( key ):
    """Return the mutable identifier -> record dict for a repository key, creating it
    on first access.
    """

    repository = _current()

    if key not in repository:
        repository[ key ] = {}

    return repository[ key ]


def delete( key, id ):
    _current().get( key, {} ).pop( id, None )


def clear():
    _current().clear()


def new_scope():
    """Install a fresh, empty repository for the current context."""

    _repository.set( ( owner(), {} ) )


def size():
    return sum( len( bucket ) for bucket in _current().values() )


def _current():
    current_owner = owner()
    entry = _repository.get()

    if entry is None or entry[ 0 ] != current_owner:
        entry = ( current_owner, {} )
        _repository.set( entry )

    return entry[ 1 ]
