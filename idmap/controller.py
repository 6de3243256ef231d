"""Controller module, responsible for high-level logic for running work against the
database with the identity map. General rules:
- The controller may know about the modules it uses to perform lower-level tasks, but
no other code (except the entry point) may know about controller functions.
- Controller module is stateless. All settings are passed in as method arguments; the
controller may not retrieve configuration itself.
"""


import logging

from idmap import db, identity_map

_logger = logging.getLogger( __name__ )


def run_unit_of_work( work, db_settings, identity_map_enabled = True ):
    """Open a db connection and run work in a fresh identity map scope for the current
    context. However work ends, the map is cleared and the connection closed. Returns a
    tuple of work's result and the scope's identity map stats.

    :param function work: Callable with the unit of work to run. It takes no arguments.
    :param dict db_settings: A dictionary with database settings.
    :param bool identity_map_enabled: Run work with the identity map enabled.
    :returns tuple
    """

    db.connect( **db_settings )
    identity_map.reset()

    try:
        if identity_map_enabled:
            result = identity_map.use( work )
        else:
            result = identity_map.without( work )

        stats = identity_map.stats()

    finally:
        identity_map.clear()
        db.close()

    for description in stats.describe():
        _logger.debug( description )

    return result, stats
