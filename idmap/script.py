"""Entry point for the idmap command. This is the only module that retrieves
configuration; it passes settings on to the controller.
"""


import argparse
import importlib
import logging

import idmap
from idmap import config, controller, hierarchy, identity_map
from idmap.db import record_mapper

_logger = logging.getLogger( __name__ )


def main( argv = None ):
    """Find records by type and id, and print them along with identity map stats.

    :param list argv: Command-line arguments (defaults to sys.argv).
    """

    args = _parse_args( argv )

    if args.config_file:
        config.filename = args.config_file

    settings = config.get()
    idmap.setup_logging( args.debug or settings.get( 'debug', False ) )
    identity_map.configure( settings.get( 'identity_map' ) )

    if args.no_identity_map:
        identity_map.set_enabled( False )

    for module_name in args.models:
        importlib.import_module( module_name )

    record_type = hierarchy.class_for_name( args.record_type )
    if record_type is None:
        raise ValueError( 'Unknown record type: {}'.format( args.record_type ) )

    _logger.debug( 'Finding {} records: {}.'.format( record_type.__name__, args.ids ) )

    records, stats = controller.run_unit_of_work(
        lambda: record_mapper.find_many( record_type, args.ids ),
        db_settings = settings[ 'db_settings' ],
        identity_map_enabled = identity_map.is_enabled()
    )

    for record in records:
        print( '{!r} {}'.format( record, record.attributes() ) )

    for description in stats.describe():
        print( description )

    return records


def _parse_args( argv ):
    parser = argparse.ArgumentParser(
        description = 'Find records by type and id using the identity map.' )

    parser.add_argument( 'record_type', help = 'Name of a registered record type.' )
    parser.add_argument( 'ids', nargs = '+', type = int, help = 'Record ids to find.' )
    parser.add_argument( '--models', action = 'append', default = [],
        help = 'Module defining record types (may be repeated).' )
    parser.add_argument( '--config-file', help = 'Configuration file to use.' )
    parser.add_argument( '--no-identity-map', action = 'store_true',
        help = 'Disable the identity map, whatever the configuration says.' )
    parser.add_argument( '--debug', action = 'store_true', help = 'Debug logging.' )

    return parser.parse_args( argv )
