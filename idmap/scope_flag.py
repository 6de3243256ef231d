"""Flag indicating whether the identity map is active. The value is local to the
current execution context (thread or asyncio task), so concurrent contexts never see
each other's setting.
"""


from contextvars import ContextVar


_enabled = ContextVar( 'identity_map_enabled', default = False )


def get():
    return _enabled.get()


def set( value ):
    _enabled.set( bool( value ) )


def run_with_value( value, body, *args, **kwargs ):
    """Call body with the flag set to value, then put back whatever value the flag had
    before, even if body raises. Returns body's result.

    :param bool value: Value for the flag while body runs.
    :param function body: Callable to run; extra arguments are passed on to it.
    """

    original_value = get()
    set( value )

    try:
        return body( *args, **kwargs )
    finally:
        set( original_value )


def enable_during( body, *args, **kwargs ):
    return run_with_value( True, body, *args, **kwargs )


def disable_during( body, *args, **kwargs ):
    return run_with_value( False, body, *args, **kwargs )
