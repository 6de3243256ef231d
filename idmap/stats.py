"""Counters describing identity map activity in one execution context."""


# Key and description of each identity map counter, in reporting order
IDENTITY_MAP_STATS = (
    ( 'hits', 'Identity map hits' ),
    ( 'misses', 'Identity map misses' ),
    ( 'added', 'Records added to identity map' ),
    ( 'removed', 'Records removed from identity map' )
)


def new_identity_map_stats():
    """Return a StatCollection with all identity map counters at zero."""

    collection = StatCollection()
    for key, description in IDENTITY_MAP_STATS:
        collection.new_stat( key, description )

    return collection


class StatCollection:

    def __init__( self ):
        self._stats = {}


    def new_stat( self, key, description, val = 0 ):
        self._stats[ key ] = _Stat( description, val )


    def increment( self, key, amount = 1 ):
        self._stats[ key ].val += amount


    def value( self, key ):
        return self._stats[ key ].val


    def values( self ):
        return { key: stat.val for key, stat in self._stats.items() }


    def hit_ratio( self ):
        """Fraction of lookups answered from the map, or None if there were none."""

        lookups = self.value( 'hits' ) + self.value( 'misses' )
        return self.value( 'hits' ) / lookups if lookups else None


    def describe( self ):
        return [ stat.describe() for stat in self._stats.values() ]


class _Stat:

    def __init__( self, description, val = 0 ):
        self._description = description
        self.val = val


    def describe( self ):
        return self._description + ': ' + str( self.val )
