"""Module to retrieve configuration settings."""


import os

import logging
import yaml

from idmap import CONFIG_FILENAME

directories_to_try = [ os.path.dirname( os.path.realpath( __file__ ) ) + '/../', '/etc/' ]
"""Directories to search for configuration file."""

ENV_VAR = 'IDMAP_CONFIG'
"""Environment variable naming a configuration file, used when filename is not set."""

filename = None
"""Non-default configuration file to load. (To load from default locations, leave this
set to None.)"""

_SECTIONS = ( 'db_settings', 'identity_map' )
"""Top-level settings that must be mappings when present."""

_config = None

_logger = logging.getLogger( __name__ )


def get():
    """Return configuration object. This method loads configuration from the appropriate
    yaml file the first time it's called."""

    if _config is None:
        _load()

    return _config


def reset():
    """Forget loaded configuration, so the next call to get() loads it again."""

    global _config
    _config = None


def _load():
    """Load the config file: the file set in filename, else the one named by the
    environment variable, else the first one found in the default locations.
    """

    explicit_filename = filename or os.environ.get( ENV_VAR )
    if explicit_filename:
        _actually_load( explicit_filename )
        return

    for directory_to_try in directories_to_try:
        try:
            _actually_load( os.path.join( directory_to_try, CONFIG_FILENAME ) )
            return

        except FileNotFoundError:
            continue

    raise FileNotFoundError( 'No configuration file found in {}.'.format(
        ', '.join( directories_to_try ) ) )


def _actually_load( actual_filename ):
    global _config
    with open( actual_filename, 'r' ) as stream:
        loaded = yaml.safe_load( stream )

    if not isinstance( loaded, dict ):
        raise ValueError( 'Configuration file {} does not contain a mapping.'.format(
            actual_filename ) )

    for section in _SECTIONS:
        if not isinstance( loaded.get( section, {} ), dict ):
            raise ValueError( 'Setting {} in {} must be a mapping.'.format(
                section, actual_filename ) )

    _config = loaded
    _logger.debug( 'Using configuration file: {}'.format( actual_filename ) )
